"""Factory for creating answer provider instances."""

from enum import Enum

from pydantic import ValidationError

from src.ai.base import AnswerProvider, ProviderConfigurationError
from src.config import get_app_settings
from src.utils.logger import logger


class AnswerProviderType(str, Enum):
    """Available answer provider types."""

    HUGGINGFACE = "huggingface"
    OPENAI = "openai"
    LOCAL = "local"


def create_answer_provider(
    provider_type: AnswerProviderType | str | None = None,
) -> AnswerProvider:
    """Create an answer provider instance.

    Args:
        provider_type: Type of provider to create. If None, uses the
            ANSWER_PROVIDER setting (default: huggingface).

    Returns:
        AnswerProvider: Instance of the specified provider

    Raises:
        ProviderConfigurationError: If the type is unknown or the provider's
            required settings (such as its API key) are missing
    """
    if provider_type is None:
        provider_type = get_app_settings().answer_provider

    if isinstance(provider_type, str):
        try:
            provider_type = AnswerProviderType(provider_type.lower())
        except ValueError as e:
            raise ProviderConfigurationError(
                f"Unsupported answer provider: {provider_type}", e
            ) from e

    logger.info(f"Creating answer provider: {provider_type.value}")

    try:
        if provider_type == AnswerProviderType.HUGGINGFACE:
            from src.ai.providers.huggingface import HuggingFaceProvider

            return HuggingFaceProvider()
        elif provider_type == AnswerProviderType.OPENAI:
            from src.ai.providers.openai import OpenAIProvider

            return OpenAIProvider()
        else:
            from src.ai.providers.local import LocalPipelineProvider

            return LocalPipelineProvider()
    except ValidationError as e:
        logger.error(
            "Answer provider is not configured",
            provider=provider_type.value,
            missing=[".".join(str(p) for p in err["loc"]) for err in e.errors()],
        )
        raise ProviderConfigurationError(
            f"{provider_type.value} provider is not configured", e
        ) from e


# Process-wide provider, created on first use
_answer_provider: AnswerProvider | None = None


def get_answer_provider() -> AnswerProvider:
    """Get the configured answer provider, creating it on first use.

    Creation failures are not cached, so fixing the environment and retrying
    works without a restart.

    Returns:
        AnswerProvider: Shared provider instance
    """
    global _answer_provider
    if _answer_provider is None:
        _answer_provider = create_answer_provider()
    return _answer_provider


def set_answer_provider(provider: AnswerProvider | None) -> None:
    """Set the global answer provider instance.

    Useful for testing or manually overriding the provider.

    Args:
        provider: The provider instance to set (``None`` resets it)
    """
    global _answer_provider
    _answer_provider = provider


async def close_answer_provider() -> None:
    """Close and forget the global provider, if one was created."""
    global _answer_provider
    if _answer_provider is not None:
        await _answer_provider.close()
        _answer_provider = None
