"""Exceptions for the in-process generation pipeline."""

from src.ai.base import AnswerProviderError


class LocalModelError(AnswerProviderError):
    """Base exception for local pipeline errors."""

    pass


class LocalModelLoadError(LocalModelError):
    """Raised when the pipeline could not be constructed.

    The loader is left in the FAILED state and the next call retries.
    """

    pass


class LocalModelGenerationError(LocalModelError):
    """Raised when a loaded pipeline fails while generating."""

    pass
