#!/usr/bin/env python3
"""
Terminal chat client for the Ask Anything service.

Usage:
    python -m src.chat_ui.cli
    python -m src.chat_ui.cli --api-url http://localhost:8080/api/ask-anything
    python -m src.chat_ui.cli --backend local --load-model

Type a question and press enter. ``/quit`` or Ctrl-D exits.
"""

import argparse
import asyncio

from src.chat_ui.backends import AskBackend, LocalAskBackend, RemoteAskBackend
from src.chat_ui.config import ChatBackendType, ChatClientSettings
from src.chat_ui.controller import ChatController
from src.chat_ui.exceptions import AskClientError
from src.chat_ui.models import Message, Notification

SAMPLE_QUESTIONS = [
    "What services does Re:cinq offer?",
    "How do they help with AI Native transformation?",
    "What is the Waves of Innovation community?",
]
QUIT_COMMANDS = {"/quit", "/exit"}


def render_empty_state() -> str:
    lines = [
        "Ask me anything about Re:cinq",
        "I can answer questions about their services, approach, and expertise.",
        "",
        "Try one of these:",
    ]
    lines.extend(f"  {index}. {question}" for index, question in enumerate(SAMPLE_QUESTIONS, 1))
    lines.append("")
    lines.append("Enter a number to ask a sample question.")
    return "\n".join(lines)


def render_message(message: Message) -> str:
    lines = [f"You: {message.question}", "", f"Assistant: {message.answer}"]
    if message.sources:
        lines.append("")
        lines.append("Sources referenced:")
        for source in message.sources:
            lines.append(f"  - {source.title}" + (f" ({source.url})" if source.url else ""))
    lines.append("")
    lines.append(message.timestamp.astimezone().strftime("%H:%M:%S"))
    return "\n".join(lines)


def render_notification(notification: Notification) -> str:
    return f"[{notification.title}] {notification.description}"


def resolve_question(text: str, show_samples: bool) -> str:
    """Map a sample number to its question while the history is empty."""
    stripped = text.strip()
    if show_samples and stripped.isdigit():
        index = int(stripped) - 1
        if 0 <= index < len(SAMPLE_QUESTIONS):
            return SAMPLE_QUESTIONS[index]
    return text


def build_backend(settings: ChatClientSettings) -> AskBackend:
    if settings.backend is ChatBackendType.LOCAL:
        return LocalAskBackend(on_progress=print)
    return RemoteAskBackend(settings)


async def run_chat(settings: ChatClientSettings, load_model: bool = False) -> None:
    backend = build_backend(settings)
    controller = ChatController(backend)

    try:
        if load_model and isinstance(backend, LocalAskBackend):
            try:
                await backend.initialize()
            except AskClientError as e:
                print(f"Error: {e.message}")

        print(render_empty_state())
        while True:
            try:
                text = await asyncio.to_thread(input, "\n> ")
            except EOFError:
                break
            if text.strip() in QUIT_COMMANDS:
                break

            question = resolve_question(text, show_samples=not controller.messages)
            if not question.strip():
                continue

            print("Thinking...")
            message = await controller.submit(question)
            if message is not None:
                print()
                print(render_message(message))
            for notification in controller.drain_notifications():
                print(render_notification(notification))
    finally:
        await backend.close()


def main():
    parser = argparse.ArgumentParser(description="Chat with the Ask Anything service")
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in ChatBackendType],
        help="Answer backend (default: ASK_CLIENT_BACKEND or remote)",
    )
    parser.add_argument("--api-url", help="Ask endpoint URL for the remote backend")
    parser.add_argument(
        "--load-model",
        action="store_true",
        help="Load the local model before the first question",
    )
    args = parser.parse_args()

    overrides = {}
    if args.backend:
        overrides["backend"] = ChatBackendType(args.backend)
    if args.api_url:
        overrides["api_url"] = args.api_url
    settings = ChatClientSettings(**overrides)

    try:
        asyncio.run(run_chat(settings, load_model=args.load_model))
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
