"""Error taxonomy for the e-learning API.

Every error renders as ``{"error": message}`` with its own HTTP status;
the handlers in ``error_handlers.py`` do the rendering.
"""


class AppError(Exception):
    """Base class for all errors raised by the application."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class ConfigurationError(AppError):
    """Required configuration is missing. Fatal at startup."""


class ValidationError(AppError):
    """Input does not satisfy a record schema."""

    http_status = 400


class DuplicateError(ValidationError):
    """A uniqueness rule was violated (email, enrollment pair)."""


class NotFoundError(AppError):
    """A referenced record does not exist."""

    http_status = 404


class StorageError(AppError):
    """Connection or query failure in the database layer."""
