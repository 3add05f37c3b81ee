"""Tests for HuggingFaceProvider using an httpx mock transport."""

import json

import httpx
import pytest

from src.ai.base import FALLBACK_ANSWER
from src.ai.huggingface.config import HuggingFaceSettings
from src.ai.huggingface.exceptions import (
    HuggingFaceAuthenticationError,
    HuggingFaceContentGenerationError,
    HuggingFaceRateLimitError,
    HuggingFaceServerError,
)
from src.ai.providers.huggingface import HuggingFaceProvider


@pytest.fixture
def settings():
    return HuggingFaceSettings(
        api_key="hf-test-key",
        base_url="https://inference.example",
        model_name="org/test-model",
    )


def make_provider(settings, handler):
    return HuggingFaceProvider(settings=settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_answer_sends_expected_request(settings):
    """Test the request shape and parsing of a list response."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"generated_text": "Re:cinq helps teams."}])

    provider = make_provider(settings, handler)
    result = await provider.generate_answer("PROMPT")
    await provider.close()

    assert result.text == "Re:cinq helps teams."
    assert result.model == "org/test-model"
    assert captured["url"] == "https://inference.example/models/org/test-model"
    assert captured["auth"] == "Bearer hf-test-key"
    assert captured["body"] == {
        "inputs": "PROMPT",
        "parameters": {
            "max_length": 1000,
            "temperature": 0.7,
            "return_full_text": False,
        },
    }


@pytest.mark.asyncio
async def test_generate_answer_accepts_single_object(settings):
    provider = make_provider(
        settings, lambda request: httpx.Response(200, json={"generated_text": "Single."})
    )

    result = await provider.generate_answer("PROMPT")

    assert result.text == "Single."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [[], [{}], {"error": "unexpected"}, [{"generated_text": ""}], [{"generated_text": 5}]],
)
async def test_malformed_payload_yields_fallback(settings, payload):
    """Test unexpected but successful payloads produce the fallback answer."""
    provider = make_provider(settings, lambda request: httpx.Response(200, json=payload))

    result = await provider.generate_answer("PROMPT")

    assert result.text == FALLBACK_ANSWER


@pytest.mark.asyncio
async def test_non_json_body_yields_fallback(settings):
    provider = make_provider(
        settings, lambda request: httpx.Response(200, content=b"<html>oops</html>")
    )

    result = await provider.generate_answer("PROMPT")

    assert result.text == FALLBACK_ANSWER


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error_type",
    [
        (401, HuggingFaceAuthenticationError),
        (403, HuggingFaceAuthenticationError),
        (429, HuggingFaceRateLimitError),
        (500, HuggingFaceServerError),
        (503, HuggingFaceServerError),
        (400, HuggingFaceContentGenerationError),
    ],
)
async def test_error_status_raises(settings, status_code, error_type):
    """Test non-success responses raise the matching provider error."""
    provider = make_provider(
        settings, lambda request: httpx.Response(status_code, json={"error": "nope"})
    )

    with pytest.raises(error_type) as exc_info:
        await provider.generate_answer("PROMPT")

    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_transport_error_raises_generation_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(settings, handler)

    with pytest.raises(HuggingFaceContentGenerationError) as exc_info:
        await provider.generate_answer("PROMPT")

    assert isinstance(exc_info.value.original_error, httpx.ConnectError)
