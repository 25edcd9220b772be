"""Domain errors raised by the messaging services.

Each error carries the HTTP status and short title the API layer renders;
services never build HTTP responses themselves.
"""

from __future__ import annotations

from fastapi import status

__all__ = [
    "MarketError",
    "ValidationError",
    "NotFoundError",
    "AccessDeniedError",
    "InvalidRecipientError",
    "InternalError",
]


class MarketError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    title: str = "Bad request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MarketError):
    """Malformed or missing input."""

    title = "Validation error"


class NotFoundError(MarketError):
    """A referenced thread, user or diamond does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    title = "Not found"


class AccessDeniedError(MarketError):
    """The caller is authenticated but not allowed to touch the thread."""

    status_code = status.HTTP_403_FORBIDDEN
    title = "Access denied"


class InvalidRecipientError(MarketError):
    """The caller tried to send an inquiry to themselves."""

    title = "Invalid recipient"


class InternalError(MarketError):
    """Store or unexpected failure; the message is safe to show callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Internal server error"
