"""Tests for the ask-anything API route and its error payloads."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from src.ai.ask.dependencies import get_ask_service
from src.ai.ask.exceptions import (
    ConfigurationError,
    GenerationFailedError,
    InvalidInputError,
)
from src.ai.ask.schemas import AskResponse, KnowledgeSourceSchema
from src.ai.ask.service import AskService
from src.ai.base import AnswerProvider, ProviderConfigurationError
from src.ai.providers import factory
from src.db import database
from src.db.config import set_db_settings
from src.main import app


@pytest.fixture
def ask_service():
    """Create a mocked AskService."""
    return AsyncMock(spec=AskService)


@pytest.fixture
def client(ask_service):
    """Create a test client with the ask service overridden."""
    app.dependency_overrides[get_ask_service] = lambda: ask_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestAskAnythingRoute:
    """Test suite for POST /api/ask-anything."""

    def test_returns_answer_and_sources(self, client, ask_service):
        """Test a successful request returns the service response."""
        ask_service.handle.return_value = AskResponse(
            answer="They offer consulting.",
            sources=[
                KnowledgeSourceSchema(
                    id="src-1",
                    title="Services",
                    url="https://re-cinq.com/services",
                    content="Consulting.",
                )
            ],
            session_id="session-1",
        )

        response = client.post(
            "/api/ask-anything",
            json={"question": "What services does Re:cinq offer?", "sessionId": "session-1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "They offer consulting."
        assert data["sessionId"] == "session-1"
        assert data["sources"] == [
            {
                "id": "src-1",
                "title": "Services",
                "url": "https://re-cinq.com/services",
                "content": "Consulting.",
            }
        ]
        ask_service.handle.assert_awaited_once_with(
            "What services does Re:cinq offer?", "session-1"
        )

    def test_missing_question_is_passed_through_as_none(self, client, ask_service):
        """Test an absent question reaches the service, which rejects it."""
        ask_service.handle.side_effect = InvalidInputError()

        response = client.post("/api/ask-anything", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Question is required"}
        ask_service.handle.assert_awaited_once_with(None, None)

    def test_generation_failure_returns_generic_500(self, client, ask_service):
        """Test a failed generation returns the user-safe message only."""
        ask_service.handle.side_effect = GenerationFailedError()

        response = client.post("/api/ask-anything", json={"question": "Hello?"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate an answer. Please try again."
        }

    def test_malformed_body_returns_400(self, client, ask_service):
        """Test a body that is not JSON is rejected with an error payload."""
        response = client.post(
            "/api/ask-anything",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
        ask_service.handle.assert_not_called()

    def test_unexpected_error_hides_details(self, ask_service):
        """Test an unhandled exception is reported without internals."""
        ask_service.handle.side_effect = RuntimeError("secret connection string")
        app.dependency_overrides[get_ask_service] = lambda: ask_service
        try:
            with TestClient(app, raise_server_exceptions=False) as test_client:
                response = test_client.post("/api/ask-anything", json={"question": "Hi?"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "secret" not in response.text

    def test_cors_preflight(self, client):
        """Test browsers may call the endpoint cross-origin."""
        response = client.options(
            "/api/ask-anything",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]


class TestHealthRoutes:
    """Test suite for the liveness routes."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_healthcheck(self, client):
        response = client.get("/healthcheck")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


def test_missing_provider_credentials_become_configuration_error(monkeypatch):
    """Test an unconfigured provider surfaces as a ConfigurationError."""

    def raise_not_configured(provider_type=None):
        raise ProviderConfigurationError("huggingface provider is not configured")

    factory.set_answer_provider(None)
    monkeypatch.setattr(factory, "create_answer_provider", raise_not_configured)

    with pytest.raises(ConfigurationError) as exc_info:
        get_ask_service(AsyncMock(), AsyncMock())

    assert exc_info.value.status_code == 500
    assert "huggingface" not in exc_info.value.message


@pytest.fixture
def unconfigured_database(monkeypatch):
    """Clear every DB_* setting so the session factory cannot be built."""
    for var in ["DB_URL", "DB_HOST", "DB_NAME", "DB_USERNAME", "DB_PASSWORD"]:
        monkeypatch.delenv(var, raising=False)
    set_db_settings(None)
    monkeypatch.setattr(database, "_async_engine", None)
    monkeypatch.setattr(database, "_async_session_local", None)
    yield
    set_db_settings(None)


def test_missing_database_settings_return_error_with_cors_headers(unconfigured_database):
    """Test a cross-origin caller can read the error when the database is unconfigured."""
    factory.set_answer_provider(AsyncMock(spec=AnswerProvider))
    try:
        with TestClient(app) as test_client:
            response = test_client.post(
                "/api/ask-anything",
                json={"question": "hi"},
                headers={"Origin": "https://example.com"},
            )
    finally:
        factory.set_answer_provider(None)

    assert response.status_code == 500
    assert response.json() == {"error": ConfigurationError.default_message}
    assert response.headers["access-control-allow-origin"] == "*"
