"""
Authentication endpoints.

Sign-up, sign-in, sign-out and session lookup. Failures answer with
``{"success": false, "error": ...}`` so the client can show the message.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.middleware.auth import get_auth_service
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    MessageResponse,
    PublicUser,
    SessionInfo,
    SessionResponse,
    SessionSummary,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    SignUpUser,
)

router = APIRouter()

SIGNUP_MESSAGE = "Account created successfully. Please check your email to verify your account."
INVALID_SIGN_IN_MESSAGE = "Invalid email or password"


def _error(status_code: int, message: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message or "Authentication failed"},
    )


def _public_user(user: Optional[AuthenticatedUser]) -> PublicUser:
    if user is None:
        return PublicUser()
    return PublicUser(id=user.id, email=user.email, display_name=user.display_name)


@router.post("/signup", response_model=SignUpResponse)
async def sign_up(
    request: SignUpRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> Union[SignUpResponse, JSONResponse]:
    """Create an account; the user must confirm their email before signing in."""
    result = await auth.sign_up(request.email, request.password, request.display_name)
    if not result.success:
        return _error(status.HTTP_400_BAD_REQUEST, result.error)

    user = result.user
    return SignUpResponse(
        message=SIGNUP_MESSAGE,
        user=SignUpUser(
            id=user.id if user else None,
            email=user.email if user else request.email,
        ),
    )


@router.post("/signin", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> Union[SignInResponse, JSONResponse]:
    """
    Sign in with email and password.

    A credentials mismatch is reported without saying which field was
    wrong. The access token itself is not echoed back.
    """
    result = await auth.sign_in(request.email, request.password)
    if not result.success:
        message = INVALID_SIGN_IN_MESSAGE if result.is_invalid_credentials else result.error
        return _error(status.HTTP_401_UNAUTHORIZED, message)

    session = result.session
    return SignInResponse(
        message="Signed in successfully",
        user=_public_user(result.user),
        session=SessionSummary(
            access_token="present" if session and session.access_token else None,
            expires_at=session.expires_at if session else None,
        ),
    )


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    auth: IAuthService = Depends(get_auth_service),
) -> Union[MessageResponse, JSONResponse]:
    """Revoke the caller's session, if any."""
    result = await auth.sign_out()
    if not result.success:
        return _error(status.HTTP_400_BAD_REQUEST, result.error)
    return MessageResponse(message="Signed out successfully")


@router.get("/session", response_model=SessionResponse)
async def get_session(
    auth: IAuthService = Depends(get_auth_service),
) -> Union[SessionResponse, JSONResponse]:
    """Describe the caller's session; ``session`` is null when signed out."""
    result = await auth.get_current_session()
    if not result.success:
        return _error(status.HTTP_400_BAD_REQUEST, result.error)

    if result.session is None:
        return SessionResponse(session=None)

    return SessionResponse(session=SessionInfo(
        user=_public_user(result.session.user or result.user),
        expires_at=result.session.expires_at,
    ))
