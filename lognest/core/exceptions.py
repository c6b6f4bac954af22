"""
Custom exceptions for Lognest API.
Each exception carries the HTTP status it is rendered with.
"""

from typing import Any


class LognestException(Exception):
    """Base exception for all Lognest-specific errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(LognestException):
    """Raised when request data is malformed or fails business validation."""

    status_code = 400


class AuthenticationError(LognestException):
    """Raised when a bearer credential is missing, invalid or expired."""

    status_code = 401


class ResourceNotFoundError(LognestException):
    """Raised when a requested resource is not found."""

    status_code = 404


class ResourceConflictError(LognestException):
    """Raised when a resource conflict occurs (e.g., duplicate creation)."""

    status_code = 409


class DatabaseError(LognestException):
    """Raised when a database operation fails."""

    status_code = 500


class ExternalServiceError(LognestException):
    """Raised when the auth provider or another downstream service fails."""

    status_code = 500


class RequestTimeoutError(LognestException):
    """Raised when a request exceeds its time budget."""

    status_code = 504
