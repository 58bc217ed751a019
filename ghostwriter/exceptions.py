"""Typed exceptions for GhostWriter article generation."""


class GenerationError(Exception):
    """Base exception for generation failures."""
    pass


class EmptyResponseError(GenerationError):
    """The service returned no text."""
    pass


class MalformedResponseError(GenerationError):
    """The service returned text that does not match the response schema."""
    pass


class AuthorizationError(GenerationError):
    """Permission denied or requested entity not found.

    Recoverable exactly once by selecting a fresh credential.
    """
    pass


class TransportError(GenerationError):
    """Any other failure talking to the generation service."""
    pass


class LLMNotConfiguredError(GenerationError):
    """Raised when no API key is available and none can be selected."""
    pass
