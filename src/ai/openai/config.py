"""OpenAI-compatible chat completions configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for the chat-completion answer backend.

    Any OpenAI-compatible endpoint works; point ``base_url`` at a self-hosted
    server to use a different model family.

    Attributes:
        api_key: API key for authentication
        base_url: Optional alternative API base URL
        model_name: Chat model used for answers
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Maximum output tokens
        request_timeout: HTTP request timeout in seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        min_length=1,
        description="OpenAI API key",
    )
    base_url: str | None = Field(
        default=None,
        description="Base URL of an OpenAI-compatible API (defaults to api.openai.com)",
    )
    model_name: str = Field(
        default="gpt-4o-mini",
        description="Chat model used to answer questions",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=1000,
        gt=0,
        description="Maximum output tokens per answer",
    )
    request_timeout: int = Field(
        default=60,
        gt=0,
        description="HTTP request timeout in seconds",
    )


@lru_cache
def get_openai_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance.

    Returns:
        OpenAISettings: Cached settings instance
    """
    return OpenAISettings()
