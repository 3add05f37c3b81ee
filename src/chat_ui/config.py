"""Configuration for the chat client."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatBackendType(str, Enum):
    """Where answers come from."""

    REMOTE = "remote"
    LOCAL = "local"


class ChatClientSettings(BaseSettings):
    """Settings for the terminal chat client."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="ASK_CLIENT_"
    )

    backend: ChatBackendType = Field(
        default=ChatBackendType.REMOTE,
        description="Answer backend: the ask API (remote) or an in-process model (local)",
    )
    api_url: str = Field(
        default="http://localhost:8080/api/ask-anything",
        description="Full URL of the ask endpoint",
    )
    timeout: float = Field(
        default=120.0, gt=0, description="Request timeout in seconds"
    )
