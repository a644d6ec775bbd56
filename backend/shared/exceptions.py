"""
Base exception classes for the Recipe Discovery backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base to an HTTP status code.
"""

from typing import Optional, Any


class RecipeAppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class NotFoundError(RecipeAppError):
    """Resource not found."""

    status_code = 404


class ValidationError(RecipeAppError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(RecipeAppError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class ConflictError(RecipeAppError):
    """Write rejected because the resource already exists."""

    status_code = 409


class ExternalServiceError(RecipeAppError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
