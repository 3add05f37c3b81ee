"""
Configuration for the in-process generation pipeline.

The defaults describe a small seq2seq model that runs acceptably on CPU.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import logger


class LocalModelSettings(BaseSettings):
    """Configuration for the local transformers pipeline."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="LOCAL_MODEL_"
    )

    task: str = Field(
        default="text2text-generation", description="transformers pipeline task"
    )
    name: str = Field(
        default="google/flan-t5-base", description="Model repository or local path"
    )
    device: str = Field(default="cpu", description="Device to run the pipeline on")
    max_new_tokens: int = Field(default=300, gt=0, description="Maximum new tokens")
    temperature: float = Field(default=0.7, ge=0.0, description="Sampling temperature")
    do_sample: bool = Field(default=True, description="Sample instead of greedy decoding")
    top_p: float = Field(default=0.9, gt=0.0, le=1.0, description="Nucleus sampling mass")


_local_model_settings: LocalModelSettings | None = None


def get_local_model_settings() -> LocalModelSettings:
    """
    Get the global local model settings instance.

    Returns:
        LocalModelSettings: The global settings instance
    """
    global _local_model_settings
    if _local_model_settings is None:
        _local_model_settings = LocalModelSettings()
        logger.info(
            "LocalModelSettings loaded",
            task=_local_model_settings.task,
            model_name=_local_model_settings.name,
        )
    return _local_model_settings


def set_local_model_settings(settings: LocalModelSettings | None) -> None:
    global _local_model_settings
    _local_model_settings = settings
