"""
Authentication module interface.

Route handlers depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AuthResult
from .subscription import AuthStateCallback, AuthStateSubscription


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Every operation returns an AuthResult envelope; provider failures are
    reported through ``success=False`` rather than raised.
    """

    async def sign_up(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> AuthResult:
        """Register a new account. Validates input before calling the provider."""
        ...

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password; returns user and session."""
        ...

    async def sign_out(self) -> AuthResult:
        """Revoke the current session, if there is one."""
        ...

    async def get_current_user(self) -> AuthResult:
        """Resolve the user owning the current access token."""
        ...

    async def get_current_session(self) -> AuthResult:
        """Return the current session, or ``session=None`` when signed out."""
        ...

    async def update_user_profile(
        self,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> AuthResult:
        """Update the signed-in user's auth metadata."""
        ...

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthStateSubscription:
        """Register a listener for sign-in/sign-out/token-refresh events."""
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Verify a JWT locally and return the user it identifies.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    def close(self) -> None:
        """Release every listener registered through this service."""
        ...
