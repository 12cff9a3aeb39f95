"""
Error types raised by the API layer and the record store.

``ResourceError`` subclasses carry the status code and the envelope
key of the JSON response they turn into; the application registers a
single exception handler for them in ``main.py``.  Anything else that
escapes a route is caught by ``ExceptionHandlingMiddleware`` and
reported as a 500.
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """Raised when the record store cannot read or write its data."""


class ResourceError(Exception):
    """Base class for errors that map onto a client‑facing response."""

    status_code = 500
    key = "error"

    def __init__(self, message: str, status_code: Optional[int] = None, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if key is not None:
            self.key = key

    def to_dict(self) -> Dict[str, Any]:
        return {self.key: self.message}


class ValidationFailed(ResourceError):
    """Missing or duplicate input."""

    status_code = 400


class ResourceNotFound(ResourceError):
    """An id or email that does not resolve to a record."""

    status_code = 404


def describe_exception(exc: BaseException) -> Dict[str, Any]:
    """Render an unexpected exception as the raw 500 payload."""
    return {"type": type(exc).__name__, "message": str(exc)}
