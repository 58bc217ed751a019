"""
GhostWriter - editorial-grade blog post generation on Gemini.

Public surface for the page and the CLI.
"""

from .exceptions import (
    GenerationError,
    EmptyResponseError,
    MalformedResponseError,
    AuthorizationError,
    TransportError,
    LLMNotConfiguredError,
)
from .models import (
    GenerationConfig,
    GeneratedDocument,
    GenerationStatus,
    GenerationOutcome,
    Pending,
    Success,
    Failed,
)
from .markdown_content import (
    TextSegment,
    IllustrationSegment,
    split_segments,
    join_segments,
    visible_segments,
    classify_lines,
    render_blocks,
)
from .generation_client import GenerationClient, GenerationRequest, build_request
from .session import GenerationSession, ThreadingTimer
from .export import format_for_clipboard, featured_image_prompt

__all__ = [
    'GenerationError',
    'EmptyResponseError',
    'MalformedResponseError',
    'AuthorizationError',
    'TransportError',
    'LLMNotConfiguredError',
    'GenerationConfig',
    'GeneratedDocument',
    'GenerationStatus',
    'GenerationOutcome',
    'Pending',
    'Success',
    'Failed',
    'TextSegment',
    'IllustrationSegment',
    'split_segments',
    'join_segments',
    'visible_segments',
    'classify_lines',
    'render_blocks',
    'GenerationClient',
    'GenerationRequest',
    'build_request',
    'GenerationSession',
    'ThreadingTimer',
    'format_for_clipboard',
    'featured_image_prompt',
]
