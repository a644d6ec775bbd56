"""
User profile data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

MAX_DISPLAY_NAME_LENGTH = 100

VALID_DIETARY_RESTRICTIONS: tuple[str, ...] = (
    "gluten-free",
    "dairy-free",
    "vegan",
    "vegetarian",
    "nut-free",
    "soy-free",
    "egg-free",
    "fish-free",
    "shellfish-free",
    "low-carb",
    "keto",
    "paleo",
    "whole30",
    "low-sodium",
    "sugar-free",
)


class UserProfile(BaseModel):
    """Row of the ``users`` table."""

    model_config = {"extra": "ignore"}

    id: str = Field(..., description="User ID (matches the auth user)")
    email: str = Field(..., description="Email address")
    display_name: Optional[str] = Field(None, description="Display name")
    dietary_restrictions: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserProfileUpdate(BaseModel):
    """
    Partial profile update.

    Constraints are checked by UserService (not here) so that every caller
    gets the same rejection messages.
    """

    display_name: Optional[str] = None
    dietary_restrictions: Optional[list[str]] = None


class UserResult(BaseModel):
    """Envelope for profile operations."""

    success: bool
    user: Optional[UserProfile] = None
    error: Optional[str] = None
    not_found: bool = Field(default=False, description="True when no profile row matched")
    backend_error: bool = Field(default=False, description="True when the database call failed")


class DietaryRestrictionsResponse(BaseModel):
    restrictions: list[str]
