"""
Custom exception hierarchy for the application.

Services raise these; the handler registered in ``app.main`` turns them into
``{"detail": message}`` responses with the status code each class declares.
"""

from typing import Any

from fastapi import HTTPException, status


class WasteTrackError(Exception):
    """Base exception for all application exceptions."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(WasteTrackError):
    """Raised when input validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST


class IntegrityViolationError(WasteTrackError):
    """Raised when a write would break a quantity or ownership invariant."""
    status_code = status.HTTP_400_BAD_REQUEST


class QuotaExceededError(WasteTrackError):
    """Raised when tenant exceeds resource quota."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(WasteTrackError):
    """Raised when authentication fails."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(WasteTrackError):
    """Raised when user lacks permissions."""
    status_code = status.HTTP_403_FORBIDDEN


class ResourceNotFoundError(WasteTrackError):
    """Raised when a requested resource doesn't exist or belongs to another tenant."""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(WasteTrackError):
    """Raised when a unique resource already exists."""
    status_code = status.HTTP_409_CONFLICT


class ExternalServiceError(WasteTrackError):
    """Raised when an essential third-party API call fails."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, service: str, message: str, details: dict[str, Any] | None = None):
        self.service = service
        super().__init__(message, {"service": service, **(details or {})})


# HTTP Exception helpers
def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    """Return 401 Unauthorized exception."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden(detail: str = "Insufficient permissions") -> HTTPException:
    """Return 403 Forbidden exception."""
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    )
