"""Answer provider implementations."""

from src.ai.providers.factory import (
    AnswerProviderType,
    close_answer_provider,
    create_answer_provider,
    get_answer_provider,
    set_answer_provider,
)

__all__ = [
    "AnswerProviderType",
    "close_answer_provider",
    "create_answer_provider",
    "get_answer_provider",
    "set_answer_provider",
]
