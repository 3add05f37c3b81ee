"""In-process text generation with a lazily built transformers pipeline."""

from src.ai.local.config import LocalModelSettings, get_local_model_settings
from src.ai.local.exceptions import (
    LocalModelError,
    LocalModelGenerationError,
    LocalModelLoadError,
)
from src.ai.local.loader import LocalPipelineLoader, PipelineState

__all__ = [
    "LocalModelSettings",
    "get_local_model_settings",
    "LocalModelError",
    "LocalModelGenerationError",
    "LocalModelLoadError",
    "LocalPipelineLoader",
    "PipelineState",
]
