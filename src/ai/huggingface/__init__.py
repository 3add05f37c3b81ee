"""Hugging Face Inference API integration package."""

from src.ai.huggingface.config import (
    HuggingFaceSettings,
    get_huggingface_settings,
    set_huggingface_settings,
)
from src.ai.huggingface.exceptions import (
    HuggingFaceAuthenticationError,
    HuggingFaceContentGenerationError,
    HuggingFaceError,
    HuggingFaceRateLimitError,
    HuggingFaceServerError,
)

__all__ = [
    "HuggingFaceSettings",
    "get_huggingface_settings",
    "set_huggingface_settings",
    "HuggingFaceError",
    "HuggingFaceAuthenticationError",
    "HuggingFaceRateLimitError",
    "HuggingFaceServerError",
    "HuggingFaceContentGenerationError",
]
