"""Exceptions raised by chat client backends."""


class AskClientError(Exception):
    """Raised when a backend could not produce an answer."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"Ask request failed ({self.status_code}): {self.message}"
        return f"Ask request failed: {self.message}"
