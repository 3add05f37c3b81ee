"""
Answer backends for the chat client.

``RemoteAskBackend`` calls the ask API over HTTP. ``LocalAskBackend`` answers
in-process with the cached local pipeline and cites no sources.
"""

from abc import ABC, abstractmethod

import httpx
from pydantic import ValidationError

from src.ai.ask.prompts import build_local_prompt
from src.ai.ask.schemas import AskRequest, AskResponse
from src.ai.local.loader import LocalPipelineLoader, ProgressCallback
from src.ai.providers.local import LocalPipelineProvider
from src.chat_ui.config import ChatClientSettings
from src.chat_ui.exceptions import AskClientError
from src.utils.logger import logger


class AskBackend(ABC):
    """Produces an answer for one question."""

    @abstractmethod
    async def ask(self, question: str, session_id: str | None = None) -> AskResponse:
        """
        Args:
            question: Trimmed, non-empty question
            session_id: Client session identifier

        Raises:
            AskClientError: If no answer could be produced
        """
        pass

    async def close(self) -> None:
        return None


class RemoteAskBackend(AskBackend):
    """Calls ``POST /api/ask-anything`` on the ask service."""

    def __init__(
        self,
        settings: ChatClientSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def ask(self, question: str, session_id: str | None = None) -> AskResponse:
        client = await self._ensure_client()
        body = AskRequest(question=question, session_id=session_id).model_dump(
            by_alias=True, exclude_none=True
        )

        try:
            response = await client.post(self.settings.api_url, json=body)
        except httpx.RequestError as e:
            raise AskClientError(f"Request error: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except ValueError:
                message = response.reason_phrase
            raise AskClientError(message, status_code=response.status_code)

        try:
            return AskResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Malformed ask response", error=str(e))
            raise AskClientError("Invalid response from the ask service") from e


class LocalAskBackend(AskBackend):
    """Answers with the in-process pipeline; the model loads on first use."""

    def __init__(
        self,
        provider: LocalPipelineProvider | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        if provider is None:
            provider = LocalPipelineProvider(
                loader=LocalPipelineLoader(on_progress=on_progress)
            )
        elif on_progress is not None:
            provider.loader.on_progress = on_progress
        self.provider = provider

    @property
    def is_initialized(self) -> bool:
        return self.provider.loader.is_ready

    async def initialize(self) -> None:
        """Load the model now instead of on the first question."""
        try:
            await self.provider.initialize()
        except Exception as e:
            raise AskClientError(str(e)) from e

    async def ask(self, question: str, session_id: str | None = None) -> AskResponse:
        prompt = build_local_prompt(question)
        try:
            result = await self.provider.generate_answer(prompt)
        except Exception as e:
            raise AskClientError(str(e)) from e
        return AskResponse(answer=result.text, sources=[], session_id=session_id or "")
