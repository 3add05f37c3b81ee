"""Database layer for PostgreSQL operations."""

from src.db.config import DatabaseSettings, get_db_settings
from src.db.conversations import Conversation, ConversationRepository
from src.db.database import Base, get_db
from src.db.knowledge_sources import KnowledgeSource, KnowledgeSourceRepository

__all__ = [
    "Base",
    "get_db",
    "DatabaseSettings",
    "get_db_settings",
    "Conversation",
    "ConversationRepository",
    "KnowledgeSource",
    "KnowledgeSourceRepository",
]
