"""Exceptions raised by the ask flow.

Every ``AskError`` carries a user-safe ``message`` and the HTTP status the API
answers with. Internal details stay in the logs.
"""


class AskError(Exception):
    """Base exception for ask flow errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AskError):
    """Raised when the request has no usable question."""

    status_code = 400
    default_message = "Question is required"


class GenerationFailedError(AskError):
    """Raised when the answer provider fails. Fatal for the request."""

    status_code = 500
    default_message = "Failed to generate an answer. Please try again."


class ConfigurationError(AskError):
    """Raised when a required credential or setting is missing."""

    status_code = 500
    default_message = "The service is not configured. Please try again later."


class UpstreamUnavailableError(AskError):
    """A knowledge store or conversation log call failed.

    Logged and absorbed by the ask flow; never returned to callers.
    """

    status_code = 503
    default_message = "An upstream service is unavailable"

    def __init__(self, message: str | None = None, upstream: str = "unknown") -> None:
        super().__init__(message)
        self.upstream = upstream
