"""OpenAI module for chat-completion answers."""

from src.ai.openai.config import OpenAISettings, get_openai_settings
from src.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAIError,
)

__all__ = [
    "OpenAISettings",
    "get_openai_settings",
    "OpenAIError",
    "OpenAIAuthenticationError",
    "OpenAIContentGenerationError",
]
