"""
SQLAlchemy model for the conversation log.

One row is appended per answered question. Rows are never updated or deleted
by this service.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.db.database import Base


class Conversation(Base):
    """A single question/answer exchange with the sources that backed it."""

    __tablename__ = "conversations"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Conversation record UUID",
    )

    question: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Question as submitted by the user",
    )

    answer: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Answer returned to the user",
    )

    sources_used: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="IDs of the knowledge sources used as context, in search order",
    )

    session_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Opaque client session identifier",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (
        Index("idx_conversations_session_created", "session_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Conversation(id={self.id}, session_id={self.session_id}, "
            f"sources_used={len(self.sources_used or [])})>"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "sources_used": self.sources_used,
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
