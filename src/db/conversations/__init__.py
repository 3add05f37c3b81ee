"""Conversation log model and repository."""

from src.db.conversations.model import Conversation
from src.db.conversations.repository import ConversationRepository

__all__ = ["Conversation", "ConversationRepository"]
