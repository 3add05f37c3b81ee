"""Tests for LocalPipelineProvider with a fake pipeline."""

import pytest

from src.ai.base import FALLBACK_ANSWER
from src.ai.local.config import LocalModelSettings
from src.ai.local.exceptions import LocalModelGenerationError, LocalModelLoadError
from src.ai.local.loader import LocalPipelineLoader
from src.ai.providers.local import LocalPipelineProvider


class FakePipeline:
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def __call__(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.error is not None:
            raise self.error
        return self.output


def make_provider(pipeline=None, factory=None):
    settings = LocalModelSettings()
    loader = LocalPipelineLoader(factory=factory or (lambda: pipeline), settings=settings)
    return LocalPipelineProvider(settings=settings, loader=loader)


@pytest.mark.asyncio
async def test_generate_answer_uses_fixed_parameters():
    pipeline = FakePipeline(output=[{"generated_text": "Re:cinq is a consultancy."}])
    provider = make_provider(pipeline)

    result = await provider.generate_answer("PROMPT")

    assert result.text == "Re:cinq is a consultancy."
    assert result.model == "google/flan-t5-base"
    assert pipeline.calls == [
        (
            "PROMPT",
            {"max_new_tokens": 300, "temperature": 0.7, "do_sample": True, "top_p": 0.9},
        )
    ]


@pytest.mark.asyncio
async def test_empty_output_yields_fallback():
    provider = make_provider(FakePipeline(output=[]))

    result = await provider.generate_answer("PROMPT")

    assert result.text == FALLBACK_ANSWER


@pytest.mark.asyncio
async def test_generation_error_is_wrapped():
    provider = make_provider(FakePipeline(error=RuntimeError("out of memory")))

    with pytest.raises(LocalModelGenerationError):
        await provider.generate_answer("PROMPT")


@pytest.mark.asyncio
async def test_load_error_propagates():
    def failing_factory():
        raise OSError("no weights")

    provider = make_provider(factory=failing_factory)

    with pytest.raises(LocalModelLoadError):
        await provider.generate_answer("PROMPT")
