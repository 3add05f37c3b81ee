"""
FastAPI dependencies for database services.

Provides dependency injection for database-related services.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.conversations.repository import ConversationRepository
from src.db.database import get_db
from src.db.knowledge_sources.repository import KnowledgeSourceRepository


def get_knowledge_source_repository(
    session: AsyncSession = Depends(get_db),
) -> KnowledgeSourceRepository:
    """
    FastAPI dependency for getting the knowledge source repository.

    Args:
        session: Database session from get_db dependency

    Returns:
        KnowledgeSourceRepository: Repository instance with injected session
    """
    return KnowledgeSourceRepository(session)


def get_conversation_repository(
    session: AsyncSession = Depends(get_db),
) -> ConversationRepository:
    """
    FastAPI dependency for getting the conversation repository.

    Args:
        session: Database session from get_db dependency

    Returns:
        ConversationRepository: Repository instance with injected session
    """
    return ConversationRepository(session)
