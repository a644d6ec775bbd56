"""
Users module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import BasicResult

from .models import UserProfileUpdate, UserResult


@runtime_checkable
class IUserService(Protocol):
    """Interface for user profile operations."""

    async def get_user_profile(self, user_id: str) -> UserResult:
        ...

    async def create_user_profile(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
        dietary_restrictions: Optional[list[str]] = None,
    ) -> UserResult:
        ...

    async def update_user_profile(self, user_id: str, updates: UserProfileUpdate) -> UserResult:
        ...

    async def delete_user_profile(self, user_id: str) -> BasicResult:
        ...

    def validate_dietary_restrictions(self, restrictions: object) -> bool:
        ...

    def get_valid_dietary_restrictions(self) -> list[str]:
        ...
