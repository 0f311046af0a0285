"""
Application error taxonomy.

Services raise these; the exception handlers in ``blogapi.main`` turn them
into ``{"error": message}`` responses with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry a public message and an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class ConflictError(AppError):
    """Write rejected because it collides with existing state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class InvariantViolation(ConflictError):
    default_message = "Only one admin is allowed"


class Unauthenticated(AppError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(AppError):
    pass
