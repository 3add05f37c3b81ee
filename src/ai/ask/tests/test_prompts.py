"""Tests for prompt assembly."""

from types import SimpleNamespace

from src.ai.ask.prompts import (
    build_context,
    build_local_prompt,
    build_prompt,
    format_source,
    load_preamble,
)


def make_source(title, url, content):
    return SimpleNamespace(title=title, url=url, content=content)


def test_format_source():
    source = make_source("About", "https://re-cinq.com/about", "We build platforms.")
    assert format_source(source) == (
        "Source: About (https://re-cinq.com/about)\nContent: We build platforms."
    )


def test_build_context_joins_sources_with_blank_line():
    sources = [
        make_source("A", "https://a.example", "Alpha"),
        make_source("B", "https://b.example", "Beta"),
    ]
    assert build_context(sources) == (
        "Source: A (https://a.example)\nContent: Alpha\n\n"
        "Source: B (https://b.example)\nContent: Beta"
    )


def test_build_context_empty():
    assert build_context([]) == ""


def test_build_prompt_layout():
    """Test the prompt is preamble, context, then the literal question."""
    sources = [make_source("A", "https://a.example", "Alpha")]

    prompt = build_prompt("What is A?", sources, preamble="PREAMBLE")

    assert prompt == (
        "PREAMBLE\n\n"
        "Context: Source: A (https://a.example)\nContent: Alpha\n\n"
        "Question: What is A?\nAnswer:"
    )


def test_build_prompt_uses_company_preamble_by_default():
    prompt = build_prompt("Hello?", [])
    assert prompt.startswith(load_preamble())
    assert "Re:cinq" in load_preamble()


def test_build_local_prompt_without_context():
    prompt = build_local_prompt("What is Re:cinq?")
    assert "Here is relevant information" not in prompt
    assert "Question: What is Re:cinq?\n" in prompt
    assert prompt.endswith("Provide a comprehensive answer in 2-3 sentences:")


def test_build_local_prompt_with_context():
    prompt = build_local_prompt("What is Re:cinq?", context="A consultancy.")
    assert "Here is relevant information: A consultancy." in prompt
