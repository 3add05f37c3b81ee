"""
SQLAlchemy model for knowledge sources.

Knowledge sources are documents (title, URL, text) that can be cited as
supporting context for an answer. They are written by an external content
process; this service only reads them.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Index, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.db.database import Base

# Text search configuration shared by the GIN index and the query
TEXT_SEARCH_CONFIG = "english"


class KnowledgeSource(Base):
    """A document eligible to be cited in an answer."""

    __tablename__ = "knowledge_sources"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Knowledge source UUID",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Display title used in citations",
    )

    url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Public URL of the source document",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Plain text searched and injected into prompts",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    def __repr__(self) -> str:
        return f"<KnowledgeSource(id={self.id}, title={self.title[:30]})>"

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model to the public source representation.

        Returns:
            dict: ``id``, ``title``, ``url`` and ``content``
        """
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "content": self.content,
        }


Index(
    "idx_knowledge_sources_content_fts",
    func.to_tsvector(TEXT_SEARCH_CONFIG, KnowledgeSource.content),
    postgresql_using="gin",
)
