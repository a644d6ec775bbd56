"""
Authentication service implementation.

Wraps Supabase Auth: sign-up, sign-in, sign-out, current user/session
lookup and profile metadata updates. One instance serves one request and
owns the auth client it was built with.
"""

import logging
from typing import Any, Optional
import jwt

from supabase import AuthError, Client

from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthResult,
    AuthSession,
    JWTPayload,
    MIN_PASSWORD_LENGTH,
    is_valid_email,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)
from .subscription import AuthStateCallback, AuthStateSubscription

logger = logging.getLogger(__name__)

SESSION_MISSING = "Auth session missing!"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase Auth for credentials and sessions. The access token of
    the calling request (if any) is bound at construction; a successful
    sign-in replaces it with the newly issued one.
    """

    def __init__(
        self,
        client: Client,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ):
        self._settings = get_settings()
        self._client = client
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._subscriptions: list[AuthStateSubscription] = []

    # -------------------------------------------------------------------------
    # Account operations
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> AuthResult:
        """Register a new account after local validation."""
        if not email or not password:
            return AuthResult(success=False, error="Email and password are required")

        if len(password) < MIN_PASSWORD_LENGTH:
            return AuthResult(
                success=False,
                error="Password must be at least 6 characters long",
            )

        if not is_valid_email(email):
            return AuthResult(success=False, error="Please enter a valid email address")

        try:
            response = self._client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"display_name": display_name or ""}},
            })
        except AuthError as e:
            return self._failure(e)

        logger.info("Sign-up accepted for %s", email)
        return AuthResult(
            success=True,
            user=_map_user(response.user),
            session=_map_session(response.session),
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        if not email or not password:
            return AuthResult(success=False, error="Email and password are required")

        try:
            response = self._client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except AuthError as e:
            return self._failure(e)

        session = _map_session(response.session)
        if session is not None:
            self._access_token = session.access_token
            self._refresh_token = session.refresh_token

        return AuthResult(success=True, user=_map_user(response.user), session=session)

    async def sign_out(self) -> AuthResult:
        """
        Revoke the bound session.

        With no access token there is nothing to revoke and the call
        succeeds.
        """
        if not self._access_token:
            return AuthResult(success=True)

        try:
            self._client.auth.admin.sign_out(self._access_token)
        except AuthError as e:
            return self._failure(e)

        self._access_token = None
        self._refresh_token = None
        return AuthResult(success=True)

    # -------------------------------------------------------------------------
    # Current user / session
    # -------------------------------------------------------------------------

    async def get_current_user(self) -> AuthResult:
        """
        Resolve the user owning the bound access token.

        Verifies the JWT locally when a JWT secret is configured, otherwise
        asks Supabase Auth.
        """
        if not self._access_token:
            return AuthResult(success=False, error=SESSION_MISSING)

        if self._settings.supabase_jwt_secret:
            try:
                user = await self.validate_token(self._access_token)
            except AuthenticationError as e:
                return AuthResult(success=False, error=e.message, error_code=e.code)
            return AuthResult(success=True, user=user)

        try:
            response = self._client.auth.get_user(self._access_token)
        except AuthError as e:
            return self._failure(e)

        user = _map_user(response.user) if response is not None else None
        if user is None:
            return AuthResult(success=False, error="User not found")
        return AuthResult(success=True, user=user)

    async def get_current_session(self) -> AuthResult:
        """Return the bound session, or ``session=None`` when signed out."""
        if not self._access_token:
            return AuthResult(success=True, session=None, user=None)

        user_result = await self.get_current_user()
        if not user_result.success:
            return user_result

        session = AuthSession(
            access_token=self._access_token,
            refresh_token=self._refresh_token,
            expires_at=_token_expiry(self._access_token),
            user=user_result.user,
        )
        return AuthResult(success=True, session=session, user=user_result.user)

    async def update_user_profile(
        self,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> AuthResult:
        """Update display name metadata and/or email of the signed-in user."""
        if not self._access_token:
            return AuthResult(success=False, error=SESSION_MISSING)

        attributes: dict[str, Any] = {}
        if display_name is not None:
            attributes["data"] = {"display_name": display_name}
        if email is not None:
            attributes["email"] = email

        try:
            # refresh_token can be empty for backend use
            self._client.auth.set_session(self._access_token, self._refresh_token or "")
            response = self._client.auth.update_user(attributes)
        except AuthError as e:
            return self._failure(e)

        return AuthResult(success=True, user=_map_user(response.user))

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        jwt_payload = JWTPayload(**payload)
        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or "",
            display_name=jwt_payload.user_metadata.get("display_name"),
        )

    # -------------------------------------------------------------------------
    # Auth state listeners
    # -------------------------------------------------------------------------

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthStateSubscription:
        """
        Register a listener invoked by the auth client on auth events.

        The returned handle must be unsubscribed (``close`` does it for
        every handle still active).
        """
        subscription = AuthStateSubscription(
            self._client.auth.on_auth_state_change(callback),
            on_release=self._subscriptions.remove,
        )
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        """Unsubscribe every listener still registered through this service."""
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

    @staticmethod
    def _failure(exc: AuthError) -> AuthResult:
        code = getattr(exc, "code", None)
        logger.warning("Auth provider error (%s): %s", code, exc.message)
        return AuthResult(
            success=False,
            error=exc.message,
            error_code=str(code) if code is not None else None,
        )


# -------------------------------------------------------------------------
# Mapping helpers
# -------------------------------------------------------------------------


def _map_user(user: Any) -> Optional[AuthenticatedUser]:
    """Map a Supabase Auth user object to AuthenticatedUser."""
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthenticatedUser(
        id=str(user.id),
        email=getattr(user, "email", None) or "",
        display_name=metadata.get("display_name"),
    )


def _map_session(session: Any) -> Optional[AuthSession]:
    """Map a Supabase Auth session object to AuthSession."""
    if session is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
        user=_map_user(getattr(session, "user", None)),
    )


def _token_expiry(token: str) -> Optional[int]:
    """Read the ``exp`` claim of a token without verifying it."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None
    exp = claims.get("exp")
    return int(exp) if exp is not None else None
