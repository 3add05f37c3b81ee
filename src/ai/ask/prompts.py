"""
Prompt assembly for the ask flow.

A prompt is always: static company preamble, then the context block built
from matched knowledge sources, then the literal question.
"""

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

from src.utils.logger import logger

PREAMBLE_FILE = Path(__file__).parent / "preamble.md"
FALLBACK_PREAMBLE = (
    "You are a knowledgeable assistant for Re:cinq, a company specializing in "
    "AI Native and Cloud Native technologies."
)


@lru_cache
def load_preamble() -> str:
    """
    Load the company preamble from disk.

    Returns:
        str: Preamble text, or a one-line fallback if the file is unreadable
    """
    try:
        preamble = PREAMBLE_FILE.read_text(encoding="utf-8").strip()
        logger.info("Loaded prompt preamble", file_name=PREAMBLE_FILE.name)
        return preamble
    except OSError as e:
        logger.error("Failed to load prompt preamble", error=str(e))
        return FALLBACK_PREAMBLE


def format_source(source: Any) -> str:
    """Render one knowledge source for the context block."""
    return f"Source: {source.title} ({source.url})\nContent: {source.content}"


def build_context(sources: Iterable[Any]) -> str:
    """Join formatted sources with blank lines (empty string when none)."""
    return "\n\n".join(format_source(source) for source in sources)


def build_prompt(question: str, sources: Iterable[Any], preamble: str | None = None) -> str:
    """
    Build the server-side answer prompt.

    Args:
        question: The user's question
        sources: Matched knowledge sources (objects with title/url/content)
        preamble: Override for the company preamble

    Returns:
        str: Complete prompt ending with an ``Answer:`` cue
    """
    preamble = preamble if preamble is not None else load_preamble()
    context = build_context(sources)
    return f"{preamble}\n\nContext: {context}\n\nQuestion: {question}\nAnswer:"


def build_local_prompt(question: str, context: str = "") -> str:
    """
    Build the shorter prompt used with the in-process model.

    Small seq2seq models do better with a compact instruction than with the
    full preamble.
    """
    context_line = f"Here is relevant information: {context}" if context else ""
    return (
        "Answer this question about Re:cinq in detail. Re:cinq is a company "
        "specializing in AI Native and Cloud Native technologies.\n\n"
        f"{context_line}\n\n"
        f"Question: {question}\n"
        "Provide a comprehensive answer in 2-3 sentences:"
    )
