"""In-process transformers pipeline provider implementation."""

import asyncio

from src.ai.base import AnswerProvider, ContentGenerationResult, extract_generated_text
from src.ai.local.config import LocalModelSettings, get_local_model_settings
from src.ai.local.exceptions import LocalModelGenerationError
from src.ai.local.loader import LocalPipelineLoader
from src.utils.logger import logger


class LocalPipelineProvider(AnswerProvider):
    """Answer provider that runs a cached generation pipeline in-process.

    The pipeline is built by ``LocalPipelineLoader`` on first use; every call
    afterwards reuses it with the fixed sampling parameters from settings.
    """

    name = "local"

    def __init__(
        self,
        settings: LocalModelSettings | None = None,
        loader: LocalPipelineLoader | None = None,
    ) -> None:
        self.settings = settings or get_local_model_settings()
        self.loader = loader or LocalPipelineLoader(settings=self.settings)

    async def initialize(self) -> None:
        """Load the model ahead of the first question."""
        await self.loader.initialize()

    async def generate_answer(self, prompt: str, **kwargs) -> ContentGenerationResult:
        """Generate an answer with the local pipeline.

        Raises:
            LocalModelLoadError: If the pipeline could not be built
            LocalModelGenerationError: If generation itself fails
        """
        pipeline = await self.loader.get()

        generation_kwargs = {
            "max_new_tokens": kwargs.get("max_new_tokens", self.settings.max_new_tokens),
            "temperature": kwargs.get("temperature", self.settings.temperature),
            "do_sample": kwargs.get("do_sample", self.settings.do_sample),
            "top_p": kwargs.get("top_p", self.settings.top_p),
        }

        try:
            result = await asyncio.to_thread(pipeline, prompt, **generation_kwargs)
        except Exception as e:
            logger.error("[LOCAL_MODEL] Generation failed", error=str(e))
            raise LocalModelGenerationError(f"Local generation failed: {e}", e) from e

        text = extract_generated_text(result)
        logger.info("[LOCAL_MODEL] Generated answer", answer_length=len(text))
        return ContentGenerationResult(text=text, model=self.settings.name)
