"""Knowledge source database model and repository."""

from src.db.knowledge_sources.model import KnowledgeSource
from src.db.knowledge_sources.repository import KnowledgeSourceRepository

__all__ = ["KnowledgeSource", "KnowledgeSourceRepository"]
