"""FastAPI dependencies for the ask flow."""

from typing import Annotated

from fastapi import Depends

from src.ai.ask.exceptions import ConfigurationError
from src.ai.ask.service import AskService
from src.ai.base import ProviderConfigurationError
from src.ai.providers.factory import get_answer_provider
from src.db.conversations.repository import ConversationRepository
from src.db.dependencies import (
    get_conversation_repository,
    get_knowledge_source_repository,
)
from src.db.knowledge_sources.repository import KnowledgeSourceRepository


def get_ask_service(
    knowledge_sources: Annotated[
        KnowledgeSourceRepository, Depends(get_knowledge_source_repository)
    ],
    conversations: Annotated[
        ConversationRepository, Depends(get_conversation_repository)
    ],
) -> AskService:
    """
    Build the ask service for one request.

    Raises:
        ConfigurationError: If the configured answer provider is missing its
            credentials or settings
    """
    try:
        provider = get_answer_provider()
    except ProviderConfigurationError as e:
        raise ConfigurationError() from e
    return AskService(knowledge_sources, conversations, provider)
