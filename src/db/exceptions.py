"""Exceptions for the database layer."""


class DatabaseConfigurationError(Exception):
    """Raised when the database connection settings are missing or invalid."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
