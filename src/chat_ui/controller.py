"""
Chat session state: an append-only message history plus a single in-flight
request.
"""

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from src.chat_ui.backends import AskBackend
from src.chat_ui.models import Message, Notification, SourceLink
from src.utils.logger import logger

FAILURE_TITLE = "Error"
FAILURE_DESCRIPTION = "Failed to get an answer. Please try again."


class ChatController:
    """Drives one chat session against an answer backend."""

    def __init__(self, backend: AskBackend, session_id: str | None = None):
        """
        Args:
            backend: Where answers come from
            session_id: Sent with every question; generated when omitted
        """
        self.backend = backend
        self.session_id = session_id or str(uuid.uuid4())
        self._messages: list[Message] = []
        self._notifications: list[Notification] = []
        self._loading = False

    @property
    def messages(self) -> Sequence[Message]:
        return tuple(self._messages)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def notifications(self) -> Sequence[Notification]:
        return tuple(self._notifications)

    def drain_notifications(self) -> list[Notification]:
        """Return pending notifications and clear them."""
        pending, self._notifications = self._notifications, []
        return pending

    async def submit(self, text: str) -> Message | None:
        """
        Ask a question and append the answer to the history.

        Returns:
            The appended message, or None if the input was blank, another
            request was in flight, or the backend failed (a notification is
            queued in that case and the history is left unchanged).
        """
        question = text.strip()
        if not question or self._loading:
            return None

        self._loading = True
        try:
            response = await self.backend.ask(question, self.session_id)
        except Exception as e:
            logger.error(
                "[CHAT] Failed to get an answer",
                session_id=self.session_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._notifications.append(
                Notification(
                    title=FAILURE_TITLE,
                    description=FAILURE_DESCRIPTION,
                    variant="destructive",
                )
            )
            return None
        finally:
            self._loading = False

        message = Message(
            id=str(uuid.uuid4()),
            question=question,
            answer=response.answer,
            sources=[
                SourceLink(id=source.id, title=source.title, url=source.url)
                for source in response.sources
            ],
            timestamp=datetime.now(timezone.utc),
        )
        self._messages.append(message)
        return message
