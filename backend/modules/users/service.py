"""
User profile service with Supabase.

Reads and writes the ``users`` table. Profile constraints (dietary
restriction allow-list, display name length) are enforced here before any
remote call.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.models import BasicResult
from shared.service import SupabaseService

from .interfaces import IUserService
from .models import (
    MAX_DISPLAY_NAME_LENGTH,
    VALID_DIETARY_RESTRICTIONS,
    UserProfile,
    UserProfileUpdate,
    UserResult,
)

logger = logging.getLogger(__name__)

USER_ID_REQUIRED = "User ID is required"


class UserService(SupabaseService, IUserService):
    """User profile service backed by the ``users`` table."""

    async def get_user_profile(self, user_id: str) -> UserResult:
        """Get a user's profile by their ID."""
        if not user_id:
            return UserResult(success=False, error=USER_ID_REQUIRED)

        try:
            result = self._db.table("users").select("*").eq("id", user_id).execute()
        except APIError as e:
            return UserResult(success=False, error=self._to_error(e).message, backend_error=True)

        row = self._first(result.data)
        if row is None:
            return UserResult(success=False, error="User not found", not_found=True)

        return UserResult(success=True, user=UserProfile.model_validate(row))

    async def create_user_profile(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
        dietary_restrictions: Optional[list[str]] = None,
    ) -> UserResult:
        """Insert the profile row for a newly registered user."""
        if dietary_restrictions and not self.validate_dietary_restrictions(dietary_restrictions):
            return UserResult(success=False, error="Invalid dietary restriction provided")

        data = {
            "id": user_id,
            "email": email,
            "display_name": display_name or None,
            "dietary_restrictions": dietary_restrictions or [],
        }

        try:
            result = self._db.table("users").insert(data).execute()
        except APIError as e:
            return UserResult(success=False, error=self._to_error(e).message, backend_error=True)

        row = self._first(result.data)
        if row is None:
            return UserResult(success=False, error="User profile creation failed")

        return UserResult(success=True, user=UserProfile.model_validate(row))

    async def update_user_profile(self, user_id: str, updates: UserProfileUpdate) -> UserResult:
        """
        Update display name and/or dietary restrictions.

        An update that matches no row is reported as not found.
        """
        if not user_id:
            return UserResult(success=False, error=USER_ID_REQUIRED)

        if updates.dietary_restrictions is not None:
            if not self.validate_dietary_restrictions(updates.dietary_restrictions):
                return UserResult(
                    success=False,
                    error=(
                        "Invalid dietary restriction provided. "
                        "Please select from the available options."
                    ),
                )

        if updates.display_name is not None and len(updates.display_name) > MAX_DISPLAY_NAME_LENGTH:
            return UserResult(
                success=False,
                error="Display name cannot exceed 100 characters",
            )

        data: dict[str, Any] = updates.model_dump(exclude_unset=True)
        if not data:
            return UserResult(success=False, error="No profile fields provided")

        try:
            result = self._db.table("users").update(data).eq("id", user_id).execute()
        except APIError as e:
            return UserResult(success=False, error=self._to_error(e).message, backend_error=True)

        row = self._first(result.data)
        if row is None:
            return UserResult(
                success=False,
                error="User not found or update failed",
                not_found=True,
            )

        logger.info("Updated profile for user %s (%s)", user_id, ", ".join(sorted(data)))
        return UserResult(success=True, user=UserProfile.model_validate(row))

    async def delete_user_profile(self, user_id: str) -> BasicResult:
        """Delete a user's profile row."""
        if not user_id:
            return BasicResult(success=False, error=USER_ID_REQUIRED)

        try:
            self._db.table("users").delete().eq("id", user_id).execute()
        except APIError as e:
            return BasicResult(success=False, error=self._to_error(e).message, backend_error=True)

        logger.info("Deleted profile for user %s", user_id)
        return BasicResult(success=True)

    def validate_dietary_restrictions(self, restrictions: object) -> bool:
        """True when every value is on the allow-list (vacuously for [])."""
        if not isinstance(restrictions, list):
            return False
        return all(r in VALID_DIETARY_RESTRICTIONS for r in restrictions)

    def get_valid_dietary_restrictions(self) -> list[str]:
        return list(VALID_DIETARY_RESTRICTIONS)
