"""
Configuration management for the Hugging Face inference integration.

This module handles environment variable configuration and validation
for the hosted text-generation backend using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import logger


class HuggingFaceSettings(BaseSettings):
    """Configuration for the Hugging Face Inference API."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="HUGGING_FACE_"
    )

    api_key: str = Field(
        min_length=1, description="Hugging Face API token for authentication"
    )
    base_url: str = Field(
        default="https://api-inference.huggingface.co",
        description="Inference API base URL",
    )
    model_name: str = Field(
        default="microsoft/DialoGPT-medium",
        description="Hosted model used for text generation",
    )
    max_length: int = Field(
        default=1000, gt=0, description="Maximum length of the generated output"
    )
    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Sampling temperature"
    )
    return_full_text: bool = Field(
        default=False, description="Whether the prompt is echoed in the output"
    )
    timeout: int = Field(default=60, gt=0, description="Request timeout in seconds")


# Global settings instance
_huggingface_settings: HuggingFaceSettings | None = None


def get_huggingface_settings() -> HuggingFaceSettings:
    """
    Get the global Hugging Face settings instance.

    Returns:
        HuggingFaceSettings: The global settings instance
    """
    global _huggingface_settings
    if _huggingface_settings is None:
        _huggingface_settings = HuggingFaceSettings()
        logger.info(
            "HuggingFaceSettings loaded", model_name=_huggingface_settings.model_name
        )
    return _huggingface_settings


def set_huggingface_settings(settings: HuggingFaceSettings | None) -> None:
    """
    Set the global Hugging Face settings instance.

    Args:
        settings: The settings to set (``None`` forces a reload)
    """
    global _huggingface_settings
    _huggingface_settings = settings
