"""OpenAI API exceptions."""

from src.ai.base import AnswerProviderError


class OpenAIError(AnswerProviderError):
    """Base exception for OpenAI API errors."""

    pass


class OpenAIAuthenticationError(OpenAIError):
    """Exception raised for authentication errors."""

    pass


class OpenAIContentGenerationError(OpenAIError):
    """Exception raised for content generation errors."""

    pass
