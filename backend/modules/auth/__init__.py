"""
Authentication module.

Handles sign-up, sign-in, sign-out, session lookup and auth state
listeners on top of Supabase Auth.

Public API:
- IAuthService: Interface for auth operations
- AuthResult / AuthSession: Result envelope and session model
- AuthStateSubscription: Handle for an auth state listener
- Auth exceptions: InvalidTokenError, ExpiredTokenError, MissingTokenError
"""

from .interfaces import IAuthService
from .models import AuthResult, AuthSession, JWTPayload
from .subscription import AuthStateSubscription
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthResult",
    "AuthSession",
    "JWTPayload",
    "AuthStateSubscription",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
]
