"""Exception hierarchy for samay-sahayak.

Every error raised on purpose by the service derives from ``PlannerError``
and carries the HTTP status it maps to, so the web layer can render a
uniform ``{"success": false, "error": ..., "details": ...}`` envelope.
"""

from typing import Any


class PlannerError(Exception):
    """Base exception for all samay-sahayak errors."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "success": False,
            "error": self.message,
            "details": self.details,
        }


class RequestValidationError(PlannerError):
    """Raised when a request is missing required fields or carries bad data."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None, details: str | None = None):
        super().__init__(message, details)
        self.field = field


class NotFoundError(PlannerError):
    """Raised when a requested record does not exist."""

    status_code = 404


class StorageError(PlannerError):
    """Raised when the document store fails.

    ``category`` is one of ``connection``, ``validation`` or ``unknown`` and
    lets handlers pick a more specific message for the client.
    """

    status_code = 500

    CONNECTION = "connection"
    VALIDATION = "validation"
    UNKNOWN = "unknown"

    def __init__(self, message: str, details: str | None = None, category: str = UNKNOWN):
        super().__init__(message, details)
        self.category = category


class DatabaseUnavailableError(StorageError):
    """Raised when the connection manager cannot reach the database."""

    def __init__(self, message: str = "Database is not connected", details: str | None = None):
        super().__init__(message, details, category=StorageError.CONNECTION)


class CompletionError(PlannerError):
    """Raised when the completion service call fails."""

    status_code = 500


class ApiError(PlannerError):
    """Raised by the HTTP client when the API answers with an error."""

    def __init__(self, message: str, status_code: int = 500, details: str | None = None):
        super().__init__(message, details)
        self.status_code = status_code
