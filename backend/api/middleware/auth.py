"""
Authentication dependencies.

Builds a request-scoped AuthService bound to the caller's bearer token and
resolves the signed-in user through it.
"""

from typing import Iterator, Optional
from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService
from shared.database import create_auth_client
from shared.models import AuthenticatedUser

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    refresh_token: Optional[str] = Header(default=None, alias="X-Refresh-Token"),
) -> Iterator[IAuthService]:
    """
    FastAPI dependency for a request-scoped auth service.

    Each request gets its own anon-key client so sessions never leak
    between callers. Listeners registered during the request are released
    when it finishes.
    """
    service = AuthService(
        create_auth_client(),
        access_token=credentials.credentials if credentials else None,
        refresh_token=refresh_token,
    )
    try:
        yield service
    finally:
        service.close()


async def get_current_user(
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    result = await auth.get_current_user()
    if not result.success or result.user is None:
        raise MissingTokenError()
    return result.user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that resolves the user when a valid token is present.

    Anonymous callers and invalid tokens both yield None.
    """
    if credentials is None:
        return None

    result = await auth.get_current_user()
    return result.user if result.success else None
