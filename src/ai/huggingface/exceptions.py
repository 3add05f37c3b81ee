"""Custom exceptions for the Hugging Face inference integration."""

from src.ai.base import AnswerProviderError


class HuggingFaceError(AnswerProviderError):
    """Base exception for all Hugging Face errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"Hugging Face API Error ({self.status_code}): {self.message}"
        return f"Hugging Face API Error: {self.message}"


class HuggingFaceAuthenticationError(HuggingFaceError):
    """Raised when the API token is rejected."""

    pass


class HuggingFaceRateLimitError(HuggingFaceError):
    """Raised when the Inference API rate limit is exceeded."""

    pass


class HuggingFaceServerError(HuggingFaceError):
    """Raised for 5xx responses, including a model that is still loading."""

    pass


class HuggingFaceContentGenerationError(HuggingFaceError):
    """Raised when a generation request fails for any other reason."""

    pass
