"""Hugging Face Inference API provider implementation."""

import httpx

from src.ai.base import AnswerProvider, ContentGenerationResult, extract_generated_text
from src.ai.huggingface.config import HuggingFaceSettings, get_huggingface_settings
from src.ai.huggingface.exceptions import (
    HuggingFaceAuthenticationError,
    HuggingFaceContentGenerationError,
    HuggingFaceRateLimitError,
    HuggingFaceServerError,
)
from src.utils.logger import logger


class HuggingFaceProvider(AnswerProvider):
    """Answer provider backed by a hosted text-generation model.

    Sends ``{"inputs": prompt, "parameters": {...}}`` to
    ``{base_url}/models/{model_name}`` and reads ``generated_text`` from the
    first candidate of the response.
    """

    name = "huggingface"

    def __init__(
        self,
        settings: HuggingFaceSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            settings: Explicit settings; loaded from the environment when omitted
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings or get_huggingface_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                headers={
                    "Authorization": f"Bearer {self.settings.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
                transport=self._transport,
            )
            logger.info(
                "[HUGGINGFACE] Client initialized", model_name=self.settings.model_name
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_payload(self, prompt: str, **kwargs) -> dict:
        parameters = {
            "max_length": kwargs.get("max_length", self.settings.max_length),
            "temperature": kwargs.get("temperature", self.settings.temperature),
            "return_full_text": kwargs.get(
                "return_full_text", self.settings.return_full_text
            ),
        }
        return {"inputs": prompt, "parameters": parameters}

    async def generate_answer(self, prompt: str, **kwargs) -> ContentGenerationResult:
        """Generate an answer with the hosted model.

        Args:
            prompt: Fully assembled prompt
            **kwargs: Overrides for ``max_length``, ``temperature`` or
                ``return_full_text``

        Returns:
            ContentGenerationResult: Generated text (or the fallback answer)

        Raises:
            HuggingFaceError: On transport errors or non-success responses
        """
        client = self._get_client()
        endpoint = f"/models/{self.settings.model_name}"

        try:
            response = await client.post(endpoint, json=self._build_payload(prompt, **kwargs))
        except httpx.RequestError as e:
            logger.error("[HUGGINGFACE] Request failed", error=str(e))
            raise HuggingFaceContentGenerationError(
                f"Request error: {e}", original_error=e
            ) from e

        status = response.status_code
        if status == 401 or status == 403:
            raise HuggingFaceAuthenticationError("Invalid API token", status_code=status)
        if status == 429:
            raise HuggingFaceRateLimitError("Rate limit exceeded", status_code=status)
        if status >= 500:
            raise HuggingFaceServerError(
                f"Server error: {response.reason_phrase}", status_code=status
            )
        if status >= 400:
            raise HuggingFaceContentGenerationError(
                f"Bad request: {response.reason_phrase}", status_code=status
            )

        try:
            data = response.json()
        except ValueError:
            # Not JSON at all; treated like any other malformed payload
            logger.warning("[HUGGINGFACE] Non-JSON response body", status_code=status)
            data = None

        text = extract_generated_text(data)
        logger.info(
            "[HUGGINGFACE] Generated answer",
            model_name=self.settings.model_name,
            answer_length=len(text),
        )
        return ContentGenerationResult(text=text, model=self.settings.model_name)

