"""
Repository for the append-only conversation log.

Provides insert and lookup operations for Conversation records using
SQLAlchemy async sessions.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.conversations.model import Conversation
from src.utils.logger import logger


class ConversationRepository:
    """Repository for recording answered questions."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create_conversation(
        self,
        question: str,
        answer: str,
        source_ids: list[str],
        session_id: str | None = None,
    ) -> Conversation:
        """
        Append a conversation record and commit it.

        The write is committed immediately so the record is durable even if
        the surrounding request later fails.

        Args:
            question: Question as submitted
            answer: Answer returned to the caller
            source_ids: IDs of the knowledge sources used as context
            session_id: Optional client session identifier

        Returns:
            Conversation: Created record

        Raises:
            Exception: If the insert fails (after rolling back the session)
        """
        conversation = Conversation(
            question=question,
            answer=answer,
            sources_used=list(source_ids),
            session_id=session_id,
        )

        try:
            self.session.add(conversation)
            await self.session.commit()
            await self.session.refresh(conversation)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            f"[ConversationRepository] Logged conversation: id={conversation.id}, "
            f"session_id={session_id}, sources={len(source_ids)}"
        )
        return conversation

    async def get_conversations_by_session(self, session_id: str) -> list[Conversation]:
        """
        Get all records for a session, oldest first.

        Args:
            session_id: Client session identifier

        Returns:
            list[Conversation]: Records for the session
        """
        result = await self.session.execute(
            select(Conversation)
            .where(Conversation.session_id == session_id)
            .order_by(Conversation.created_at)
        )
        return list(result.scalars().all())
