"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from the auth provider (or a verified JWT) and made
    available to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="User's email address")
    display_name: Optional[str] = Field(None, description="Display name from user metadata")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }


class ServiceError(BaseModel):
    """Error reported by the backend, reduced to what callers may inspect."""

    message: str
    code: Optional[str] = None

    @property
    def is_conflict(self) -> bool:
        """True when the backend rejected a write on a unique constraint."""
        return self.code == UNIQUE_VIOLATION_CODE or "duplicate key" in self.message


class ServiceResponse(BaseModel, Generic[T]):
    """
    Data-or-error envelope returned by the data services.

    Exactly one of ``data`` / ``error`` is meaningful: ``error`` is set when
    the backend reported a failure; otherwise ``data`` holds the result,
    which may legitimately be None (e.g. lookup of a missing row).
    """

    data: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BasicResult(BaseModel):
    """Success flag with an optional error message."""

    success: bool
    error: Optional[str] = None
    backend_error: bool = False
