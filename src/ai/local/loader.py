"""
Lazy loader for the in-process generation pipeline.

Building a transformers pipeline downloads weights and takes a long time, so
it happens once, on first use or on an explicit ``initialize()`` call, and
the result is cached for the lifetime of the process.

State machine::

    UNINITIALIZED --initialize()--> INITIALIZING --ok--> READY
                                         |
                                         +--error--> FAILED --initialize()--> INITIALIZING

Callers that arrive while INITIALIZING await the same in-flight task rather
than starting a second build. A failed build leaves no cached pipeline behind.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Any

from src.ai.local.config import LocalModelSettings, get_local_model_settings
from src.ai.local.exceptions import LocalModelLoadError
from src.utils.logger import logger

ProgressCallback = Callable[[str], None]

PROGRESS_LOADING = "Loading AI model (this may take a minute)..."
PROGRESS_READY = "Model loaded successfully!"
PROGRESS_FAILED = "Error loading model. Please try again."


class PipelineState(str, Enum):
    """Lifecycle of the cached pipeline."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


def build_transformers_pipeline(settings: LocalModelSettings) -> Any:
    """Construct a transformers pipeline from settings (blocking)."""
    from transformers import pipeline

    return pipeline(settings.task, model=settings.name, device=settings.device)


class LocalPipelineLoader:
    """Builds the generation pipeline once and hands out the cached instance."""

    def __init__(
        self,
        factory: Callable[[], Any] | None = None,
        settings: LocalModelSettings | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """
        Args:
            factory: Blocking callable returning a ready pipeline. Defaults to
                building a transformers pipeline from ``settings``.
            settings: Local model settings (only used by the default factory)
            on_progress: Receives human-readable progress messages
        """
        if factory is None:
            resolved = settings or get_local_model_settings()
            factory = lambda: build_transformers_pipeline(resolved)  # noqa: E731
        self._factory = factory
        self.on_progress = on_progress

        self._state = PipelineState.UNINITIALIZED
        self._pipeline: Any = None
        self._init_task: asyncio.Task | None = None
        self._lock = asyncio.Lock()
        self.last_error: Exception | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is PipelineState.READY

    def _report(self, message: str) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(message)
        except Exception as e:
            logger.warning("[LOCAL_MODEL] Progress callback failed", error=str(e))

    async def get(self) -> Any:
        """Return the pipeline, building it first if needed."""
        if self._state is PipelineState.READY:
            return self._pipeline
        return await self.initialize()

    async def initialize(self) -> Any:
        """Build the pipeline, or join a build that is already running.

        Returns:
            The ready pipeline

        Raises:
            LocalModelLoadError: If construction fails. The next call retries.
        """
        async with self._lock:
            if self._state is PipelineState.READY:
                return self._pipeline
            if self._init_task is None:
                self._state = PipelineState.INITIALIZING
                self._init_task = asyncio.create_task(self._load())
                self._init_task.add_done_callback(_retrieve_exception)
            task = self._init_task

        # Shielded so one cancelled waiter does not abort a shared build
        return await asyncio.shield(task)

    async def _load(self) -> Any:
        self._report(PROGRESS_LOADING)
        logger.info("[LOCAL_MODEL] Building pipeline")
        try:
            pipeline = await asyncio.to_thread(self._factory)
        except Exception as e:
            self._pipeline = None
            self._state = PipelineState.FAILED
            self.last_error = e
            self._init_task = None
            logger.error("[LOCAL_MODEL] Failed to build pipeline", error=str(e))
            self._report(PROGRESS_FAILED)
            raise LocalModelLoadError(f"Failed to load local model: {e}", e) from e

        self._pipeline = pipeline
        self._state = PipelineState.READY
        self.last_error = None
        self._init_task = None
        logger.info("[LOCAL_MODEL] Pipeline ready")
        self._report(PROGRESS_READY)
        return pipeline


def _retrieve_exception(task: asyncio.Task) -> None:
    # Marks a failure as retrieved when every waiter was cancelled; _load already logged it
    if not task.cancelled():
        task.exception()
