"""
Generation request client.

Builds the structured request (prompt, system instruction, response schema),
sends it to Gemini, validates the JSON response into a GeneratedDocument and
applies the recoverable-error policy: one credential reselection and one
retry after an authorization failure, nothing else.

Usage:
    from ghostwriter.generation_client import GenerationClient
    from ghostwriter.credentials import EnvKeySelector

    client = GenerationClient(key_selector=EnvKeySelector())
    document = client.generate(GenerationConfig(topic="Sustainable coffee"))
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from ghostwriter.config import config
from ghostwriter.credentials import KeySelector, current_api_key
from ghostwriter.exceptions import (
    AuthorizationError,
    EmptyResponseError,
    GenerationError,
    LLMNotConfiguredError,
    MalformedResponseError,
    TransportError,
)
from ghostwriter.models import GeneratedDocument, GenerationConfig
from ghostwriter.prompts import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, render_article_prompt
from ghostwriter.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    prompt: str
    system_instruction: str
    response_schema: types.Schema
    response_mime_type: str = "application/json"

    def to_content_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.system_instruction,
            response_mime_type=self.response_mime_type,
            response_schema=self.response_schema,
        )


def build_request(article: GenerationConfig, model: Optional[str] = None) -> GenerationRequest:
    return GenerationRequest(
        model=model or config.models.GENERATION_MODEL,
        prompt=render_article_prompt(article),
        system_instruction=SYSTEM_INSTRUCTION,
        response_schema=RESPONSE_SCHEMA,
    )


def parse_response(text: Optional[str]) -> GeneratedDocument:
    """Decode the service's JSON text into a document.

    Raises:
        EmptyResponseError: No text at all.
        MalformedResponseError: Not JSON, or title/content missing.
    """
    if not text or not text.strip():
        raise EmptyResponseError("No content generated")
    try:
        return GeneratedDocument.model_validate_json(text)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response did not match the article schema ({e.error_count()} error(s))"
        ) from e


# ---------------------------------------------------------------------------
# Authorization failure detection (status code + message fallback)
# ---------------------------------------------------------------------------

_AUTH_CODES = (403, "403", "PERMISSION_DENIED")

_AUTH_SUBSTRINGS = [
    "403",
    "requested entity was not found",
]


def is_authorization_failure(exc: Exception) -> bool:
    """Permission denied, or an entity-not-found that points at a bad key/project."""
    for attr in ("code", "status_code", "status"):
        if getattr(exc, attr, None) in _AUTH_CODES:
            return True
    msg = str(exc).lower()
    return any(s in msg for s in _AUTH_SUBSTRINGS)


def _default_client_factory(api_key: str) -> Any:
    return genai.Client(api_key=api_key)


class GenerationClient:
    """Issues one article request, retrying once after credential reselection.

    Args:
        key_selector: Optional credential collaborator. Without one,
            authorization failures propagate immediately.
        client_factory: Builds a service client from an API key. Called once
            per attempt so a newly selected key is used on the retry.
        api_key_provider: Returns the current API key.
        model: Model name; defaults to config.models.GENERATION_MODEL.
    """

    MAX_RETRIES = 1

    def __init__(
        self,
        key_selector: Optional[KeySelector] = None,
        client_factory: Callable[[str], Any] = _default_client_factory,
        api_key_provider: Callable[[], Optional[str]] = current_api_key,
        model: Optional[str] = None,
    ):
        self.key_selector = key_selector
        self._client_factory = client_factory
        self._api_key_provider = api_key_provider
        self.model = model or config.models.GENERATION_MODEL

    def _select_credential(self, error_cls) -> None:
        """Ask the selector for a key; its failures become error_cls.

        Ctrl-C or EOF at an interactive prompt counts as a failed selection.
        """
        try:
            self.key_selector.select_credential()
        except GenerationError:
            raise
        except (Exception, KeyboardInterrupt) as e:
            logger.error("credential_selection_failed", error=str(e),
                         error_type=type(e).__name__)
            raise error_cls(f"Could not select an API key: {e!r}") from e

    def _reselect_credential(self, retry_state) -> None:
        """Invoked by tenacity between the first attempt and the retry."""
        exc = retry_state.outcome.exception()
        logger.warning(
            "credential_reselect",
            attempt=retry_state.attempt_number,
            error=str(exc),
        )
        self._select_credential(AuthorizationError)

    def _attempt(self, request: GenerationRequest) -> GeneratedDocument:
        api_key = self._api_key_provider()
        if not api_key:
            raise LLMNotConfiguredError(
                "No Gemini API key configured. Set GOOGLE_API_KEY or select a key."
            )

        try:
            client = self._client_factory(api_key)
            response = client.models.generate_content(
                model=request.model,
                contents=request.prompt,
                config=request.to_content_config(),
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error("generation_call_failed", error=str(e),
                         error_type=type(e).__name__)
            if is_authorization_failure(e):
                raise AuthorizationError(str(e)) from e
            raise TransportError(str(e)) from e

        return parse_response(getattr(response, "text", None))

    def generate(self, article: GenerationConfig) -> GeneratedDocument:
        """Generate one article.

        Raises:
            EmptyResponseError, MalformedResponseError: Bad response.
            AuthorizationError: Rejected credential, after at most one retry.
            TransportError: Any other service failure.
            LLMNotConfiguredError: No key and none could be selected.
        """
        request = build_request(article, self.model)
        logger.info("generation_started", model=request.model,
                    topic=article.topic, target_word_count=article.target_word_count)

        # Pre-flight selection does not count against the retry
        if self.key_selector is not None and not self.key_selector.has_credential():
            self._select_credential(LLMNotConfiguredError)

        max_attempts = 1 + (self.MAX_RETRIES if self.key_selector is not None else 0)
        retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_none(),
            retry=retry_if_exception_type(AuthorizationError),
            before_sleep=self._reselect_credential,
            reraise=True,
        )

        for attempt in retrying:
            with attempt:
                document = self._attempt(request)

        logger.info("generation_succeeded", title=document.title,
                    content_chars=len(document.content))
        return document
