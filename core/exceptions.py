"""
Failure kinds raised by the farm management services.

Every failure a service raises is an HttpError subclass tagged with an
ErrorKind, so the translation boundary can dispatch on the kind alone.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    PERSISTENCE_FAILURE = "persistence_failure"
    UNEXPECTED = "unexpected"


class HttpError(Exception):
    """Base exception for all failures that map to an API error response."""
    kind: ErrorKind = ErrorKind.UNEXPECTED
    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original = original


class NotFoundError(HttpError):
    """Raised when an entity does not exist or is not owned by the caller."""
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    error = "Not Found"


class ConflictError(HttpError):
    """Raised on uniqueness or state conflicts."""
    kind = ErrorKind.CONFLICT
    status_code = 409
    error = "Conflict"


class UnauthorizedError(HttpError):
    """Raised when the caller identity is missing or invalid."""
    kind = ErrorKind.UNAUTHORIZED
    status_code = 401
    error = "Unauthorized"


class ModifyDatabaseError(HttpError):
    """Raised when a write to the store fails after validation succeeded."""
    kind = ErrorKind.PERSISTENCE_FAILURE
    status_code = 500
    error = "Conflict"

    def __init__(self, original: BaseException):
        super().__init__(f"Failed to write to the database: {_describe(original)}", original)


class UnexpectedError(HttpError):
    """Wraps any failure not otherwise classified."""
    kind = ErrorKind.UNEXPECTED
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, original: BaseException):
        super().__init__(_describe(original), original)


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
