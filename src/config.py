import json
from enum import Enum
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    answer_provider: str = Field(
        default="huggingface",
        description="Answer generation backend (huggingface, openai, or local)",
    )
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(
        default=["authorization", "x-client-info", "apikey", "content-type"],
        description="Request headers accepted on cross-origin calls",
    )

    @field_validator("cors_allow_origins", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> object:
        # Accepts a JSON list or CORS_ALLOW_ORIGINS=https://a.example,https://b.example
        if not isinstance(value, str):
            return value
        if value.lstrip().startswith("["):
            return json.loads(value)
        return [item.strip() for item in value.split(",") if item.strip()]


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings | None) -> None:
    """Replace the global settings instance (``None`` forces a reload)."""
    global _app_settings
    _app_settings = settings
