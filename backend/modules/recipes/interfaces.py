"""
Recipes module interface.

The API layer depends on IRecipeService for all recipe operations.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import ServiceResponse

from .models import (
    CreateRecipeRequest,
    PopularRecipe,
    Recipe,
    RecipeFilters,
    RecipeListResponse,
    RecipeQueryOptions,
    RecipeStats,
    SavedRecipe,
    SavedRecipeStats,
    UpdateRecipeRequest,
)


@runtime_checkable
class IRecipeService(Protocol):
    """
    Interface for recipe operations.

    Every method returns a ServiceResponse; backend-reported errors are
    returned in ``error``, never raised.
    """

    async def get_all_recipes(
        self,
        options: RecipeQueryOptions,
    ) -> ServiceResponse[RecipeListResponse]:
        """One filtered, sorted page of recipes with total count."""
        ...

    async def get_recipe_by_id(self, recipe_id: str) -> ServiceResponse[Recipe]:
        """A single recipe; ``data`` is None when it does not exist."""
        ...

    async def create_recipe(self, recipe: CreateRecipeRequest) -> ServiceResponse[Recipe]:
        ...

    async def update_recipe(
        self,
        recipe_id: str,
        updates: UpdateRecipeRequest,
    ) -> ServiceResponse[Recipe]:
        """Partial update; ``data`` is None when no row matched."""
        ...

    async def delete_recipe(self, recipe_id: str) -> ServiceResponse[None]:
        """Delete without an existence check."""
        ...

    async def get_user_saved_recipes(self, user_id: str) -> ServiceResponse[list[SavedRecipe]]:
        ...

    async def save_recipe(self, user_id: str, recipe_id: str) -> ServiceResponse[SavedRecipe]:
        """Bookmark a recipe; a duplicate surfaces as a conflict error."""
        ...

    async def unsave_recipe(self, user_id: str, recipe_id: str) -> ServiceResponse[None]:
        ...

    async def is_recipe_saved(self, user_id: str, recipe_id: str) -> ServiceResponse[bool]:
        ...

    async def get_recipes_with_saved_status(
        self,
        user_id: str,
        options: RecipeQueryOptions,
    ) -> ServiceResponse[RecipeListResponse]:
        ...

    async def search_recipes(self, term: str, limit: int = 20) -> ServiceResponse[list[Recipe]]:
        ...

    async def get_popular_recipes(self, limit: int = 10) -> ServiceResponse[list[PopularRecipe]]:
        ...

    async def get_recipe_count(
        self,
        filters: Optional[RecipeFilters] = None,
    ) -> ServiceResponse[int]:
        ...

    async def get_recipe_stats(self) -> ServiceResponse[RecipeStats]:
        ...

    async def get_user_saved_stats(self, user_id: str) -> ServiceResponse[SavedRecipeStats]:
        ...
