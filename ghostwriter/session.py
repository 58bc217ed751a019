"""
Generation session - caller-side state for one article request at a time.

Tracks the GenerationOutcome of the current request, the cosmetic
planning -> writing phase, and a monotonically increasing request id so a
late result from a superseded request is discarded.

Usage:
    session = GenerationSession(ThreadingTimer())
    outcome = session.run(client, GenerationConfig(topic="..."))
"""

import threading
from typing import Callable, Optional, Protocol

from ghostwriter.config import config
from ghostwriter.exceptions import GenerationError
from ghostwriter.models import (
    Failed,
    GeneratedDocument,
    GenerationConfig,
    GenerationOutcome,
    GenerationStatus,
    Pending,
    Success,
)
from ghostwriter.utils.logging import get_logger

logger = get_logger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Timer(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingTimer:
    """Runs callbacks on a daemon thread after a real delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class GenerationSession:
    """State machine: IDLE -> PLANNING -> WRITING -> SUCCESS | ERROR.

    PLANNING -> WRITING is driven by the timer and is purely cosmetic; a
    request may complete straight from PLANNING.
    """

    def __init__(self, timer: Timer, planning_delay: Optional[float] = None):
        self._timer = timer
        self.planning_delay = (
            config.ui.PLANNING_PHASE_SECONDS if planning_delay is None else planning_delay
        )
        self._lock = threading.RLock()
        self._request_id = 0
        self._phase_handle: Optional[TimerHandle] = None
        self.status = GenerationStatus.IDLE
        self.outcome: Optional[GenerationOutcome] = None

    @property
    def request_id(self) -> int:
        return self._request_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._request_id

    def _cancel_phase_timer(self) -> None:
        if self._phase_handle is not None:
            self._phase_handle.cancel()
            self._phase_handle = None

    def start(self) -> int:
        """Begin a new request, superseding any in flight."""
        with self._lock:
            self._cancel_phase_timer()
            self._request_id += 1
            request_id = self._request_id
            self.status = GenerationStatus.PLANNING
            self.outcome = Pending()
            self._phase_handle = self._timer.call_later(
                self.planning_delay, lambda: self._enter_writing(request_id)
            )
            return request_id

    def _enter_writing(self, request_id: int) -> None:
        with self._lock:
            if self.is_current(request_id) and self.status is GenerationStatus.PLANNING:
                self.status = GenerationStatus.WRITING

    def _resolve(self, request_id: int, outcome: GenerationOutcome,
                 status: GenerationStatus) -> bool:
        with self._lock:
            if not self.is_current(request_id) or not isinstance(self.outcome, Pending):
                logger.info("stale_result_discarded", request_id=request_id,
                            current_request_id=self._request_id)
                return False
            self._cancel_phase_timer()
            self.outcome = outcome
            self.status = status
            return True

    def complete(self, request_id: int, document: GeneratedDocument) -> bool:
        return self._resolve(request_id, Success(document), GenerationStatus.SUCCESS)

    def fail(self, request_id: int, message: str) -> bool:
        message = message or config.ui.GENERIC_ERROR_MESSAGE
        return self._resolve(request_id, Failed(message), GenerationStatus.ERROR)

    def reset(self) -> None:
        """Back to IDLE; anything still in flight becomes stale."""
        with self._lock:
            self._cancel_phase_timer()
            self._request_id += 1
            self.status = GenerationStatus.IDLE
            self.outcome = None

    def run(self, client, article: GenerationConfig) -> Optional[GenerationOutcome]:
        """Start a request, call the client and resolve the outcome.

        Returns the session's outcome afterwards, which belongs to a newer
        request if this one was superseded while running.
        """
        request_id = self.start()
        try:
            document = client.generate(article)
        except GenerationError as e:
            logger.error("generation_failed", request_id=request_id,
                         error_type=type(e).__name__, error=str(e))
            self.fail(request_id, str(e))
        else:
            self.complete(request_id, document)
        return self.outcome

    @property
    def document(self) -> Optional[GeneratedDocument]:
        if isinstance(self.outcome, Success):
            return self.outcome.document
        return None

    @property
    def error_message(self) -> Optional[str]:
        if isinstance(self.outcome, Failed):
            return self.outcome.message
        return None
