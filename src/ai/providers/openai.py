"""OpenAI-compatible chat completions provider implementation."""

from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from src.ai.base import AnswerProvider, ContentGenerationResult, extract_generated_text
from src.ai.openai.config import OpenAISettings, get_openai_settings
from src.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
)
from src.utils.logger import logger


def extract_message_content(response: Any) -> str:
    """Read the first choice's message content from a chat completion.

    Accepts the SDK's ``ChatCompletion`` model or an already decoded dict.
    Missing choices or empty content yield the fallback answer.
    """
    data = response.model_dump() if hasattr(response, "model_dump") else response
    choices = data.get("choices") if isinstance(data, dict) else None
    message = choices[0].get("message") if choices and isinstance(choices[0], dict) else None
    return extract_generated_text(message, text_field="content")


class OpenAIProvider(AnswerProvider):
    """Answer provider backed by a chat-completion API.

    The assembled prompt is sent as a single user message:
    ``{model, messages: [{role, content}], temperature, max_tokens}``.
    """

    name = "openai"

    def __init__(
        self,
        settings: OpenAISettings | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize OpenAI provider.

        Args:
            settings: Explicit settings; loaded from the environment when omitted
            client: Pre-built client (used by tests)
        """
        self.settings = settings or get_openai_settings()
        self._client: AsyncOpenAI | None = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            try:
                timeout = httpx.Timeout(
                    timeout=self.settings.request_timeout,
                    connect=10.0,
                )
                self._client = AsyncOpenAI(
                    api_key=self.settings.api_key,
                    base_url=self.settings.base_url,
                    timeout=timeout,
                    max_retries=0,
                )
                logger.info(
                    "[OPENAI] Client initialized",
                    model_name=self.settings.model_name,
                    timeout_seconds=self.settings.request_timeout,
                )
            except Exception as e:
                logger.error("[OPENAI] Failed to initialize client", error=str(e))
                raise OpenAIAuthenticationError(
                    f"Failed to authenticate with OpenAI: {e}", e
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def generate_answer(self, prompt: str, **kwargs) -> ContentGenerationResult:
        """Generate an answer with a chat completion.

        Args:
            prompt: Fully assembled prompt
            **kwargs: Overrides for ``model``, ``temperature`` or ``max_tokens``

        Returns:
            ContentGenerationResult: Generated text (or the fallback answer)

        Raises:
            OpenAIError: If the API call fails
        """
        client = self._get_client()
        model = kwargs.get("model") or self.settings.model_name

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=kwargs.get("temperature", self.settings.temperature),
                max_tokens=kwargs.get("max_tokens", self.settings.max_tokens),
            )
        except openai.AuthenticationError as e:
            logger.error("[OPENAI] Authentication failed", error=str(e))
            raise OpenAIAuthenticationError(f"Authentication failed: {e}", e) from e
        except openai.OpenAIError as e:
            logger.error("[OPENAI] Chat completion failed", error=str(e))
            raise OpenAIContentGenerationError(f"Chat completion failed: {e}", e) from e

        text = extract_message_content(response)
        usage = response.usage.model_dump() if getattr(response, "usage", None) else None
        choices = getattr(response, "choices", None) or []
        finish_reason = choices[0].finish_reason if choices else None

        logger.info(
            "[OPENAI] Generated answer",
            model_name=model,
            answer_length=len(text),
            finish_reason=finish_reason,
        )
        return ContentGenerationResult(
            text=text, model=model, usage=usage, finish_reason=finish_reason
        )
