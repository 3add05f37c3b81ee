"""
Repository for knowledge source database operations.

Provides full-text search over knowledge sources using PostgreSQL's
``websearch_to_tsquery`` so user questions can be passed through verbatim
(quoted phrases, ``or`` and ``-term`` are understood).
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.knowledge_sources.model import TEXT_SEARCH_CONFIG, KnowledgeSource
from src.utils.logger import logger


class KnowledgeSourceRepository:
    """Repository for searching and loading knowledge sources."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def search(self, query: str, limit: int | None = None) -> list[KnowledgeSource]:
        """
        Find knowledge sources whose content matches a web-search style query.

        Args:
            query: Free text query (typically the user's question)
            limit: Optional cap on the number of rows returned

        Returns:
            list[KnowledgeSource]: Matching sources, best match first

        Raises:
            Exception: If the query fails. The transaction is rolled back first
                so the session stays usable for later writes.
        """
        ts_query = func.websearch_to_tsquery(TEXT_SEARCH_CONFIG, query)
        ts_vector = func.to_tsvector(TEXT_SEARCH_CONFIG, KnowledgeSource.content)

        stmt = (
            select(KnowledgeSource)
            .where(ts_vector.op("@@")(ts_query))
            .order_by(func.ts_rank(ts_vector, ts_query).desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self.session.execute(stmt)
        except Exception:
            await self.session.rollback()
            raise

        sources = list(result.scalars().all())
        logger.debug(
            "[KnowledgeSourceRepository] Search complete",
            source_count=len(sources),
        )
        return sources

    async def get_source(self, source_id: str) -> KnowledgeSource | None:
        """
        Get a single knowledge source by ID.

        Args:
            source_id: Knowledge source UUID

        Returns:
            KnowledgeSource | None: The source, or None if not found
        """
        result = await self.session.execute(
            select(KnowledgeSource).where(KnowledgeSource.id == source_id)
        )
        return result.scalar_one_or_none()

    async def create_source(
        self, title: str, content: str, url: str | None = None
    ) -> KnowledgeSource:
        """
        Insert a knowledge source. Used by the seeding script only.

        Args:
            title: Display title
            content: Searchable text
            url: Optional public URL

        Returns:
            KnowledgeSource: The created row with its generated ID
        """
        source = KnowledgeSource(title=title, url=url, content=content)
        self.session.add(source)
        await self.session.flush()
        await self.session.refresh(source)

        logger.info(
            f"[KnowledgeSourceRepository] Created source: id={source.id}, title={title}"
        )
        return source
