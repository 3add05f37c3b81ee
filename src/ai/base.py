"""Base classes for answer provider abstraction."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

# Returned whenever a backend answers with an unexpected or empty payload
FALLBACK_ANSWER = "No response generated"


class ContentGenerationResult(BaseModel):
    """Result from content generation."""

    text: str
    model: str | None = None
    usage: dict[str, Any] | None = None
    finish_reason: str | None = None


class AnswerProviderError(Exception):
    """Base exception for all answer provider errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ProviderConfigurationError(AnswerProviderError):
    """Raised when a provider is selected but its settings are missing or invalid."""

    pass


def extract_generated_text(data: Any, text_field: str = "generated_text") -> str:
    """Pull the answer text out of a text-generation payload.

    Generation APIs return either a list of candidates or a single object.
    The first candidate's ``text_field`` is used; anything else (missing
    field, empty list, non-string, blank text) yields ``FALLBACK_ANSWER``.

    Args:
        data: Decoded response payload
        text_field: Key holding the generated text

    Returns:
        str: Generated text or the fallback answer
    """
    candidate = data[0] if isinstance(data, list) and data else data
    if isinstance(candidate, dict):
        text = candidate.get(text_field)
        if isinstance(text, str) and text.strip():
            return text
    return FALLBACK_ANSWER


class AnswerProvider(ABC):
    """Abstract base class for answer generation backends.

    Provides a common interface for the hosted inference API, chat-completion
    API and in-process pipeline backends so the ask flow never needs to know
    which one is configured. Each backend owns its fixed generation
    parameters.
    """

    name: str = "base"

    @abstractmethod
    async def generate_answer(self, prompt: str, **kwargs) -> ContentGenerationResult:
        """Generate an answer for a fully assembled prompt.

        Args:
            prompt: Prompt text (preamble, context and question)
            **kwargs: Provider-specific overrides of the default parameters

        Returns:
            ContentGenerationResult: Normalized text plus optional metadata.
                ``text`` is never empty; malformed payloads yield
                ``FALLBACK_ANSWER``.

        Raises:
            AnswerProviderError: If the backend call fails
        """
        pass

    async def close(self) -> None:
        """Release any network clients held by the provider."""
        return None
