"""
Configuration management for database connections.

This module handles database configuration using Pydantic settings.
Either a complete ``DB_URL`` or the individual ``DB_HOST``/``DB_NAME``/
``DB_USERNAME``/``DB_PASSWORD`` parts must be provided.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import logger


class DatabaseSettings(BaseSettings):
    """Database configuration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="DB_"
    )

    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy async URL; overrides the individual parts",
    )
    host: str | None = Field(default=None, description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str | None = Field(default=None, description="Database name")
    username: str | None = Field(default=None, description="Database username")
    password: str | None = Field(default=None, description="Database user password")
    ssl: bool = Field(default=True, description="Require SSL on connections")

    # Connection pool settings
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    echo: bool = Field(default=False, description="Echo SQL statements to logs")

    @model_validator(mode="after")
    def _require_connection_details(self) -> "DatabaseSettings":
        if self.url:
            return self
        missing = [
            field
            for field in ("host", "name", "username", "password")
            if not getattr(self, field)
        ]
        if missing:
            raise ValueError(
                "Database connection is not configured; set DB_URL or "
                + ", ".join(f"DB_{field.upper()}" for field in missing)
            )
        return self

    def get_sync_url(self) -> str:
        """
        Get synchronous database URL for psycopg2 (used by Alembic).

        Returns:
            str: Database connection URL for sync operations
        """
        if self.url:
            return self.url.replace("+asyncpg", "+psycopg2")
        ssl = "?sslmode=require" if self.ssl else ""
        return f"postgresql+psycopg2://{self.username}:{self.password}@{self.host}:{self.port}/{self.name}{ssl}"

    def get_async_url(self) -> str:
        """
        Get asynchronous database URL for asyncpg.

        Returns:
            str: Database connection URL for async operations
        """
        if self.url:
            return self.url
        ssl = "?ssl=require" if self.ssl else ""
        return f"postgresql+asyncpg://{self.username}:{self.password}@{self.host}:{self.port}/{self.name}{ssl}"


# Global settings instance
_db_settings: DatabaseSettings | None = None


def get_db_settings() -> DatabaseSettings:
    """
    Get the global database settings instance.

    Returns:
        DatabaseSettings: The global settings instance
    """
    global _db_settings
    if _db_settings is None:
        _db_settings = DatabaseSettings()
        logger.info(
            "DatabaseSettings loaded",
            host=_db_settings.host,
            port=_db_settings.port,
            database=_db_settings.name,
            url_override=_db_settings.url is not None,
        )
    return _db_settings


def set_db_settings(settings: DatabaseSettings | None) -> None:
    """
    Set the global database settings instance.

    Useful for testing.

    Args:
        settings: The settings to set (``None`` forces a reload)
    """
    global _db_settings
    _db_settings = settings
