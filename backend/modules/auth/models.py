"""
Authentication module data models.

These models define the auth envelopes returned by AuthService and the
request/response bodies of the auth endpoints.
"""

import re
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from shared.models import AuthenticatedUser

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

# Provider error for a wrong email/password pair
INVALID_CREDENTIALS_CODE = "invalid_credentials"
INVALID_CREDENTIALS_MESSAGE = "Invalid login credentials"


def is_valid_email(email: str) -> bool:
    """Check an address against the simple local@domain.tld shape."""
    return bool(EMAIL_PATTERN.match(email))


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class AuthSession(BaseModel):
    """An auth session bound to a user."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = Field(None, description="Expiry as epoch seconds")
    user: Optional[AuthenticatedUser] = None


class AuthResult(BaseModel):
    """
    Envelope returned by every AuthService operation.

    ``error_code`` carries the provider's machine-readable code (when it
    sent one) so callers can recognise specific failures without parsing
    the message.
    """

    success: bool
    user: Optional[AuthenticatedUser] = None
    session: Optional[AuthSession] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def is_invalid_credentials(self) -> bool:
        return (
            self.error_code == INVALID_CREDENTIALS_CODE
            or self.error == INVALID_CREDENTIALS_MESSAGE
        )


# -------------------------------------------------------------------------
# Request bodies
# -------------------------------------------------------------------------


class SignUpRequest(BaseModel):
    """Request body for POST /api/auth/signup."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    display_name: Optional[str] = Field(None, alias="displayName")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise PydanticCustomError("email", "Please enter a valid email address")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least 6 characters long",
            )
        return value


class SignInRequest(BaseModel):
    """Request body for POST /api/auth/signin."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise PydanticCustomError("email", "Please enter a valid email address")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("password_required", "Password is required")
        return value


# -------------------------------------------------------------------------
# Response bodies
# -------------------------------------------------------------------------


class PublicUser(BaseModel):
    """User fields safe to return to the client."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")


class SignUpUser(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None


class SignUpResponse(BaseModel):
    success: bool = True
    message: str
    user: SignUpUser


class SessionSummary(BaseModel):
    """Session fields returned by sign-in; the token itself is never echoed."""

    access_token: Optional[str] = Field(None, description='"present" when a token was issued')
    expires_at: Optional[int] = None


class SignInResponse(BaseModel):
    success: bool = True
    message: str
    user: PublicUser
    session: SessionSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class SessionInfo(BaseModel):
    user: PublicUser
    expires_at: Optional[int] = None


class SessionResponse(BaseModel):
    success: bool = True
    session: Optional[SessionInfo] = None
