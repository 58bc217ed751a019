"""Structured logging for GhostWriter.

Uses structlog for JSON-formatted, machine-readable logs written to a
rotating file (ghostwriter.jsonl) under the logs directory. Each record is
one event name plus key/value context:

- generation_started / generation_succeeded: model, topic, target length,
  then the returned title and content size.
- generation_call_failed, generation_failed: the service error and the
  error type, at the client and at the session.
- credential_reselect, credential_selection_failed: the authorization
  failure that triggered reselection, and a selector that could not
  provide a key.
- credential_reloaded, credential_selected, credential_saved,
  credential_not_entered, env_file_missing: where a key came from. Key
  values are never logged.
- stale_result_discarded: a result that arrived after a newer request or
  a reset.
- config_validation: configuration issues and warnings at page startup.
"""
import logging
import logging.handlers
from pathlib import Path

import structlog


def configure_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    """Configure structured logging with JSON renderer and file output.

    Args:
        log_dir: Directory for log files. Created if it doesn't exist.
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)

    # File handler with rotation (10MB, keep 5)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path / "ghostwriter.jsonl",
        maxBytes=10_000_000,
        backupCount=5,
        encoding="utf-8",
    )

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[file_handler],
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a named structlog logger.

    Args:
        name: Logger name, typically the module or component name.
    """
    return structlog.get_logger(name)
