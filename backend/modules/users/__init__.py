"""
User profiles module.

Public API:
- IUserService: Interface for profile operations
- UserProfile / UserProfileUpdate / UserResult: Profile models and envelope
- VALID_DIETARY_RESTRICTIONS: The dietary restriction allow-list
"""

from .interfaces import IUserService
from .models import (
    VALID_DIETARY_RESTRICTIONS,
    UserProfile,
    UserProfileUpdate,
    UserResult,
)
from .exceptions import InvalidProfileError, UserProfileNotFoundError

__all__ = [
    "IUserService",
    "VALID_DIETARY_RESTRICTIONS",
    "UserProfile",
    "UserProfileUpdate",
    "UserResult",
    "InvalidProfileError",
    "UserProfileNotFoundError",
]
