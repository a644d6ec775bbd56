"""
User profile endpoints.

Provides endpoints for the signed-in user's profile and the dietary
restriction allow-list.
"""

import logging

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_user_service
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import DietaryRestrictionsResponse, UserProfile, UserProfileUpdate
from .exceptions import InvalidProfileError, UserProfileNotFoundError
from modules.auth.models import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserProfile)
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfile:
    """Get the current user's profile."""
    result = await service.get_user_profile(user.id)
    if result.not_found:
        raise UserProfileNotFoundError(user.id)
    if not result.success or result.user is None:
        logger.error("Error fetching profile for %s: %s", user.id, result.error)
        raise ExternalServiceError("Failed to fetch user profile", service="supabase")
    return result.user


@router.patch("/me", response_model=UserProfile)
async def update_my_profile(
    updates: UserProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserProfile:
    """Update display name and/or dietary restrictions."""
    result = await service.update_user_profile(user.id, updates)
    if result.not_found:
        raise UserProfileNotFoundError(user.id, result.error or "User not found")
    if result.backend_error:
        logger.error("Error updating profile for %s: %s", user.id, result.error)
        raise ExternalServiceError("Failed to update user profile", service="supabase")
    if not result.success or result.user is None:
        raise InvalidProfileError(result.error or "Invalid profile update")
    return result.user


@router.delete("/me", response_model=MessageResponse)
async def delete_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete the current user's profile row."""
    result = await service.delete_user_profile(user.id)
    if result.backend_error:
        logger.error("Error deleting profile for %s: %s", user.id, result.error)
        raise ExternalServiceError("Failed to delete user profile", service="supabase")
    if not result.success:
        raise InvalidProfileError(result.error or "Failed to delete profile")
    return MessageResponse(message="Profile deleted successfully")


@router.get("/dietary-restrictions", response_model=DietaryRestrictionsResponse)
async def list_dietary_restrictions(
    service: IUserService = Depends(get_user_service),
) -> DietaryRestrictionsResponse:
    """List the dietary restrictions a profile may contain."""
    return DietaryRestrictionsResponse(restrictions=service.get_valid_dietary_restrictions())
