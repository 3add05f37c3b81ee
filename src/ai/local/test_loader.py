"""
Unit tests for LocalPipelineLoader.

A plain callable stands in for the transformers pipeline factory.
"""

import asyncio
import time

import pytest

from src.ai.local.exceptions import LocalModelLoadError
from src.ai.local.loader import (
    PROGRESS_FAILED,
    PROGRESS_LOADING,
    PROGRESS_READY,
    LocalPipelineLoader,
    PipelineState,
)


class CountingFactory:
    """Builds a sentinel pipeline and counts how often it was called."""

    def __init__(self, fail_times: int = 0, delay: float = 0.0):
        self.calls = 0
        self.fail_times = fail_times
        self.delay = delay

    def __call__(self):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.calls <= self.fail_times:
            raise OSError("model download failed")
        return f"pipeline-{self.calls}"


@pytest.mark.asyncio
async def test_initialize_builds_once():
    """Test the pipeline is built on first use and then cached."""
    factory = CountingFactory()
    loader = LocalPipelineLoader(factory=factory)

    assert loader.state is PipelineState.UNINITIALIZED
    first = await loader.get()
    second = await loader.get()

    assert first == "pipeline-1"
    assert second is first
    assert factory.calls == 1
    assert loader.is_ready


@pytest.mark.asyncio
async def test_concurrent_initialize_shares_one_build():
    """Test callers arriving during a build await the same build."""
    factory = CountingFactory(delay=0.05)
    loader = LocalPipelineLoader(factory=factory)

    results = await asyncio.gather(
        loader.initialize(), loader.initialize(), loader.get()
    )

    assert results == ["pipeline-1", "pipeline-1", "pipeline-1"]
    assert factory.calls == 1
    assert loader.state is PipelineState.READY


@pytest.mark.asyncio
async def test_failed_build_can_be_retried():
    """Test a failed build is not cached and the next call retries."""
    factory = CountingFactory(fail_times=1)
    loader = LocalPipelineLoader(factory=factory)

    with pytest.raises(LocalModelLoadError) as exc_info:
        await loader.initialize()

    assert loader.state is PipelineState.FAILED
    assert not loader.is_ready
    assert isinstance(loader.last_error, OSError)
    assert isinstance(exc_info.value.original_error, OSError)

    pipeline = await loader.initialize()

    assert pipeline == "pipeline-2"
    assert factory.calls == 2
    assert loader.state is PipelineState.READY
    assert loader.last_error is None


@pytest.mark.asyncio
async def test_progress_messages():
    """Test progress is reported for loading, success and failure."""
    messages = []
    loader = LocalPipelineLoader(
        factory=CountingFactory(fail_times=1), on_progress=messages.append
    )

    with pytest.raises(LocalModelLoadError):
        await loader.initialize()
    await loader.initialize()

    assert messages == [
        PROGRESS_LOADING,
        PROGRESS_FAILED,
        PROGRESS_LOADING,
        PROGRESS_READY,
    ]


@pytest.mark.asyncio
async def test_broken_progress_callback_does_not_break_loading():
    def broken(message):
        raise ValueError("display closed")

    loader = LocalPipelineLoader(factory=CountingFactory(), on_progress=broken)

    assert await loader.initialize() == "pipeline-1"


@pytest.mark.asyncio
async def test_failed_build_without_waiters_is_retrieved_and_retried():
    """Test a build whose only caller was cancelled still fails cleanly."""
    factory = CountingFactory(fail_times=1, delay=0.05)
    loader = LocalPipelineLoader(factory=factory)

    waiter = asyncio.create_task(loader.initialize())
    await asyncio.sleep(0.01)
    build = loader._init_task
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    while not build.done():
        await asyncio.sleep(0.01)
    await asyncio.sleep(0)

    assert loader.state is PipelineState.FAILED
    assert build._log_traceback is False
    assert await loader.initialize() == "pipeline-2"
