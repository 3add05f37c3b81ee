"""Terminal chat client for the Ask Anything service."""

from src.chat_ui.backends import AskBackend, LocalAskBackend, RemoteAskBackend
from src.chat_ui.controller import ChatController

__all__ = ["AskBackend", "ChatController", "LocalAskBackend", "RemoteAskBackend"]
