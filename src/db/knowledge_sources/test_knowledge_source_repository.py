"""
Unit tests for KnowledgeSourceRepository.

Tests search and CRUD operations using mocked async sessions.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.knowledge_sources.model import KnowledgeSource
from src.db.knowledge_sources.repository import KnowledgeSourceRepository


@pytest.fixture
def mock_session():
    """Create a mock async session."""
    session = AsyncMock(spec=AsyncSession)
    return session


@pytest.fixture
def repository(mock_session):
    """Create a KnowledgeSourceRepository with mocked session."""
    return KnowledgeSourceRepository(mock_session)


@pytest.fixture
def sample_source():
    """Create a sample KnowledgeSource instance for testing."""
    return KnowledgeSource(
        id="11111111-1111-1111-1111-111111111111",
        title="Services",
        url="https://re-cinq.com/services",
        content="Re:cinq offers AI Native consulting.",
    )


def compile_statement(mock_session) -> str:
    statement = mock_session.execute.call_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.mark.asyncio
async def test_search_returns_matches(repository, mock_session, sample_source):
    """Test full-text search returns the matched rows."""
    # Setup
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_source]
    mock_session.execute = AsyncMock(return_value=mock_result)

    # Execute
    results = await repository.search("What services does Re:cinq offer?")

    # Assert
    assert results == [sample_source]
    sql = compile_statement(mock_session)
    assert "websearch_to_tsquery" in sql
    assert "to_tsvector" in sql
    assert "ts_rank" in sql
    assert "LIMIT" not in sql


@pytest.mark.asyncio
async def test_search_with_limit(repository, mock_session):
    """Test the optional limit is applied."""
    # Setup
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = []
    mock_session.execute = AsyncMock(return_value=mock_result)

    # Execute
    results = await repository.search("kubernetes", limit=3)

    # Assert
    assert results == []
    assert "LIMIT" in compile_statement(mock_session)


@pytest.mark.asyncio
async def test_search_failure_rolls_back(repository, mock_session):
    """Test a failed search rolls back the session and re-raises."""
    # Setup
    mock_session.execute = AsyncMock(side_effect=RuntimeError("connection lost"))
    mock_session.rollback = AsyncMock()

    # Execute / Assert
    with pytest.raises(RuntimeError):
        await repository.search("anything")

    mock_session.rollback.assert_called_once()


@pytest.mark.asyncio
async def test_get_source_found(repository, mock_session, sample_source):
    """Test getting a source by ID."""
    # Setup
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_source
    mock_session.execute = AsyncMock(return_value=mock_result)

    # Execute
    result = await repository.get_source(sample_source.id)

    # Assert
    assert result == sample_source


@pytest.mark.asyncio
async def test_get_source_not_found(repository, mock_session):
    """Test getting a source that does not exist."""
    # Setup
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute = AsyncMock(return_value=mock_result)

    # Execute
    result = await repository.get_source("missing")

    # Assert
    assert result is None


@pytest.mark.asyncio
async def test_create_source(repository, mock_session):
    """Test inserting a knowledge source."""
    # Setup
    mock_session.flush = AsyncMock()
    mock_session.refresh = AsyncMock()

    # Execute
    source = await repository.create_source(
        title="About", content="Re:cinq is a consultancy.", url="https://re-cinq.com"
    )

    # Assert
    assert source.title == "About"
    assert source.url == "https://re-cinq.com"
    mock_session.add.assert_called_once_with(source)
    mock_session.flush.assert_called_once()
    mock_session.refresh.assert_called_once_with(source)


def test_to_dict(sample_source):
    """Test the dictionary form exposes the public fields."""
    data = sample_source.to_dict()

    assert data["id"] == sample_source.id
    assert data["title"] == "Services"
    assert data["url"] == "https://re-cinq.com/services"
    assert data["content"] == "Re:cinq offers AI Native consulting."
