"""
Article models - the request configuration, the generated document and the
outcome of one generation request.

Usage:
    from ghostwriter.models import GenerationConfig, GeneratedDocument
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, PositiveInt, StrictStr

from ghostwriter.config import config as app_config


class GenerationConfig(BaseModel):
    """What the user asked for. Immutable for the duration of one request."""
    model_config = ConfigDict(frozen=True)

    topic: str
    audience: str = app_config.form.DEFAULT_AUDIENCE
    tone: str = app_config.form.DEFAULT_TONE
    keywords: str = ""
    target_word_count: PositiveInt = app_config.form.DEFAULT_WORD_COUNT


class GeneratedDocument(BaseModel):
    """The article returned by the service: a title and Markdown content."""
    model_config = ConfigDict(frozen=True)

    title: StrictStr
    content: StrictStr


class GenerationStatus(Enum):
    """Presentation-facing status of the current request."""
    IDLE = "idle"
    PLANNING = "planning"   # "Thinking"
    WRITING = "writing"     # "Writing"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_generating(self) -> bool:
        return self in (GenerationStatus.PLANNING, GenerationStatus.WRITING)


@dataclass(frozen=True)
class Pending:
    """Request started, no result yet."""


@dataclass(frozen=True)
class Success:
    document: GeneratedDocument


@dataclass(frozen=True)
class Failed:
    message: str


GenerationOutcome = Union[Pending, Success, Failed]
