"""
Users module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class UserProfileNotFoundError(NotFoundError):
    """Raised when a user has no profile row."""

    def __init__(self, user_id: str, message: str = "User not found"):
        super().__init__(
            message,
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidProfileError(ValidationError):
    """Raised when a profile update is rejected."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PROFILE")
