"""
Domain exceptions raised by services.

Each carries the HTTP status it maps to; the app factory registers a handler
that turns them into ``{"detail": ...}`` responses.
"""
from fastapi import status


class LedgerError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(LedgerError):
    """Record absent or outside the caller's organization."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(LedgerError):
    """Cross-organization access or insufficient role."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(LedgerError):
    """Uniqueness or membership conflict."""

    status_code = status.HTTP_409_CONFLICT


class InvalidInputError(LedgerError):
    """Request is well-formed but cannot be applied."""

    status_code = status.HTTP_400_BAD_REQUEST
