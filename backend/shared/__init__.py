"""
Shared infrastructure for the Recipe Discovery backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- log: Logging setup
- service: Base class for Supabase-backed services

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, create_auth_client, reset_client_cache
from .exceptions import (
    RecipeAppError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
)
from .models import AuthenticatedUser, BasicResult, ServiceError, ServiceResponse

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "create_auth_client",
    "reset_client_cache",
    "RecipeAppError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "BasicResult",
    "ServiceError",
    "ServiceResponse",
]
