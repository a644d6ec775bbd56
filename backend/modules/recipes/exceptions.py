"""
Recipes module exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError


class RecipeNotFoundError(NotFoundError):
    """Raised when a recipe is not found."""

    def __init__(self, recipe_id: str):
        super().__init__(
            "Recipe not found",
            code="RECIPE_NOT_FOUND",
            details={"recipe_id": recipe_id},
        )


class RecipeNotSavedError(NotFoundError):
    """Raised when unsaving a recipe the user has not saved."""

    def __init__(self, recipe_id: str):
        super().__init__(
            "Recipe is not saved",
            code="RECIPE_NOT_SAVED",
            details={"recipe_id": recipe_id},
        )


class RecipeAlreadySavedError(ConflictError):
    """Raised when a user saves a recipe twice."""

    def __init__(self, recipe_id: str):
        super().__init__(
            "Recipe is already saved",
            code="RECIPE_ALREADY_SAVED",
            details={"recipe_id": recipe_id},
        )


class RecipeBackendError(ExternalServiceError):
    """
    Raised when the database reported an error for a recipe operation.

    The message is the generic text shown to clients; the backend's own
    message stays in ``details`` for logging only.
    """

    def __init__(self, message: str, backend_message: Optional[str] = None):
        super().__init__(
            message,
            service="supabase",
            code="RECIPE_BACKEND_ERROR",
            details={"backend_message": backend_message},
        )
