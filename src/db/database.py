"""
Database connection and session management for PostgreSQL.

Provides SQLAlchemy engine, session factory, and dependency injection
for FastAPI endpoints.
"""

from collections.abc import AsyncGenerator

from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.db.config import get_db_settings
from src.db.exceptions import DatabaseConfigurationError
from src.utils.logger import logger


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# Lazy-loaded engines and session factories
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_sync_engine = None


def get_async_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _async_engine
    if _async_engine is None:
        settings = get_db_settings()
        _async_engine = create_async_engine(
            settings.get_async_url(),
            echo=settings.echo,
            pool_pre_ping=True,  # Verify connections before using
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
        )
    return _async_engine


def get_async_session_local() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            bind=get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _async_session_local


def get_sync_engine():
    """Get or create the sync database engine (for Alembic migrations)."""
    global _sync_engine
    if _sync_engine is None:
        settings = get_db_settings()
        _sync_engine = create_engine(
            settings.get_sync_url(),
            echo=settings.echo,
            pool_pre_ping=True,
        )
    return _sync_engine


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Repositories commit their own writes; anything still pending when the
    request finishes is committed here.

    Yields:
        AsyncSession: Database session for use in endpoints

    Raises:
        DatabaseConfigurationError: If the DB_* settings are missing or invalid
    """
    try:
        session_local = get_async_session_local()
    except ValidationError as e:
        logger.error(
            "Database is not configured",
            errors=[err["msg"] for err in e.errors()],
        )
        raise DatabaseConfigurationError("Database is not configured", e) from e

    async with session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize database by creating all tables.

    Note:
        In production, use Alembic migrations instead.
        This is useful for testing or initial setup.
    """
    logger.info("Initializing database tables...")
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized successfully")


async def close_db() -> None:
    """
    Close database connections and dispose of engine.

    Call this on application shutdown. Does nothing if no engine was created.
    """
    global _async_engine, _async_session_local
    if _async_engine is None:
        return
    logger.info("Closing database connections...")
    await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None
    logger.info("Database connections closed")
