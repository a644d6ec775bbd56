"""
Recipes service implementation with Supabase.

Reads and writes the ``recipes`` and ``user_saved_recipes`` tables. Filter
handling lives in ``filters``; this module issues the queries and maps rows
to models.
"""

import asyncio
import logging
import math
from collections import Counter
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.models import ServiceResponse
from shared.service import SupabaseService

from .filters import TITLE_OR_DESCRIPTION, TextMatch, apply_predicates, build_predicates
from .interfaces import IRecipeService
from .models import (
    CreateRecipeRequest,
    PopularRecipe,
    Recipe,
    RecipeFilters,
    RecipeListResponse,
    RecipeQueryOptions,
    RecipeStats,
    RecipeWithSaved,
    SavedRecipe,
    SavedRecipeStats,
    SortOrder,
    UpdateRecipeRequest,
    calculate_total_time,
)

logger = logging.getLogger(__name__)

RECIPES = "recipes"
SAVED = "user_saved_recipes"


class RecipeService(SupabaseService, IRecipeService):
    """
    Recipe service with Supabase backend.

    Implements IRecipeService. Stateless apart from the client, so one
    instance can serve the whole process.
    """

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    async def get_all_recipes(
        self,
        options: RecipeQueryOptions,
    ) -> ServiceResponse[RecipeListResponse]:
        """
        Get one page of recipes plus the total matching count.

        The page and the exact count are fetched concurrently against the
        same predicates.
        """
        predicates = build_predicates(options)
        offset = (options.page - 1) * options.limit

        page_query = apply_predicates(self._db.table(RECIPES).select("*"), predicates)
        page_query = page_query.order(
            options.sort_by.value,
            desc=options.sort_order != SortOrder.ASC,
        ).range(offset, offset + options.limit - 1)

        count_query = apply_predicates(
            self._db.table(RECIPES).select("*", count="exact", head=True),
            predicates,
        )

        try:
            page_result, count_result = await asyncio.gather(
                asyncio.to_thread(page_query.execute),
                asyncio.to_thread(count_query.execute),
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        total = count_result.count or 0
        return ServiceResponse(data=RecipeListResponse(
            recipes=[Recipe.model_validate(row) for row in page_result.data or []],
            total=total,
            page=options.page,
            limit=options.limit,
            total_pages=math.ceil(total / options.limit),
        ))

    async def get_recipes_with_saved_status(
        self,
        user_id: str,
        options: RecipeQueryOptions,
    ) -> ServiceResponse[RecipeListResponse]:
        """Get a page of recipes annotated with the user's saved flags."""
        page = await self.get_all_recipes(options)
        if page.error or page.data is None:
            return page

        try:
            result = self._db.table(SAVED).select("recipe_id").eq("user_id", user_id).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        saved_ids = {row["recipe_id"] for row in result.data or []}
        page.data.recipes_with_saved = [
            RecipeWithSaved(
                **recipe.model_dump(),
                is_saved=recipe.id in saved_ids,
                total_time_minutes=calculate_total_time(recipe),
            )
            for recipe in page.data.recipes
        ]
        return page

    async def search_recipes(self, term: str, limit: int = 20) -> ServiceResponse[list[Recipe]]:
        """Search title and description, newest first."""
        query = TextMatch(term, TITLE_OR_DESCRIPTION).apply(self._db.table(RECIPES).select("*"))
        try:
            result = query.order("created_at", desc=True).limit(limit).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=[Recipe.model_validate(row) for row in result.data or []])

    async def get_popular_recipes(self, limit: int = 10) -> ServiceResponse[list[PopularRecipe]]:
        """
        Get recent recipes ranked by how many users saved them.

        Takes the newest ``limit`` recipes and orders them by save count.
        """
        try:
            result = (
                self._db.table(RECIPES)
                .select(f"*, {SAVED}(count)")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        recipes = [
            PopularRecipe(**row, save_count=_embedded_count(row.get(SAVED)))
            for row in result.data or []
        ]
        recipes.sort(key=lambda r: r.save_count, reverse=True)
        return ServiceResponse(data=recipes)

    async def get_recipe_count(
        self,
        filters: Optional[RecipeFilters] = None,
    ) -> ServiceResponse[int]:
        """Exact count of recipes matching the filters."""
        predicates = build_predicates(filters or RecipeFilters(), TITLE_OR_DESCRIPTION)
        query = apply_predicates(
            self._db.table(RECIPES).select("*", count="exact", head=True),
            predicates,
        )
        try:
            result = query.execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=result.count or 0)

    async def get_recipe_stats(self) -> ServiceResponse[RecipeStats]:
        """Total count and meal type / difficulty distributions."""
        total_query = self._db.table(RECIPES).select("*", count="exact", head=True)
        meal_query = self._db.table(RECIPES).select("meal_type").not_.is_("meal_type", "null")
        difficulty_query = (
            self._db.table(RECIPES)
            .select("difficulty_level")
            .not_.is_("difficulty_level", "null")
        )

        try:
            total, meal_types, difficulties = await asyncio.gather(
                asyncio.to_thread(total_query.execute),
                asyncio.to_thread(meal_query.execute),
                asyncio.to_thread(difficulty_query.execute),
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=RecipeStats(
            total_count=total.count or 0,
            meal_type_distribution=_distribution(meal_types.data, "meal_type"),
            difficulty_distribution=_distribution(difficulties.data, "difficulty_level"),
        ))

    # -------------------------------------------------------------------------
    # Recipe CRUD
    # -------------------------------------------------------------------------

    async def get_recipe_by_id(self, recipe_id: str) -> ServiceResponse[Recipe]:
        """Get a single recipe by ID."""
        try:
            result = self._db.table(RECIPES).select("*").eq("id", recipe_id).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        row = self._first(result.data)
        return ServiceResponse(data=Recipe.model_validate(row) if row else None)

    async def create_recipe(self, recipe: CreateRecipeRequest) -> ServiceResponse[Recipe]:
        """Insert a recipe and return the stored row."""
        try:
            result = self._db.table(RECIPES).insert(recipe.to_row()).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        row = self._first(result.data)
        if row:
            logger.info("Created recipe %s", row.get("id"))
        return ServiceResponse(data=Recipe.model_validate(row) if row else None)

    async def update_recipe(
        self,
        recipe_id: str,
        updates: UpdateRecipeRequest,
    ) -> ServiceResponse[Recipe]:
        """Apply a partial update; ``data`` is None when nothing matched."""
        try:
            result = (
                self._db.table(RECIPES)
                .update(updates.to_row())
                .eq("id", recipe_id)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        row = self._first(result.data)
        return ServiceResponse(data=Recipe.model_validate(row) if row else None)

    async def delete_recipe(self, recipe_id: str) -> ServiceResponse[None]:
        """
        Delete a recipe.

        Does not check that the row existed: deleting a missing recipe
        succeeds unless the backend reports an error.
        """
        try:
            self._db.table(RECIPES).delete().eq("id", recipe_id).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        logger.info("Deleted recipe %s", recipe_id)
        return ServiceResponse(data=None)

    # -------------------------------------------------------------------------
    # Saved recipes
    # -------------------------------------------------------------------------

    async def get_user_saved_recipes(self, user_id: str) -> ServiceResponse[list[SavedRecipe]]:
        """A user's saved recipes with the joined recipe, newest first."""
        try:
            result = (
                self._db.table(SAVED)
                .select(f"*, {RECIPES}(*)")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=[SavedRecipe.model_validate(row) for row in result.data or []])

    async def save_recipe(self, user_id: str, recipe_id: str) -> ServiceResponse[SavedRecipe]:
        """
        Save a recipe for a user.

        A second save of the same pair violates the table's unique
        constraint; the returned error then has ``is_conflict`` set.
        """
        try:
            result = self._db.table(SAVED).insert({
                "user_id": user_id,
                "recipe_id": recipe_id,
            }).execute()
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        row = self._first(result.data)
        return ServiceResponse(data=SavedRecipe.model_validate(row) if row else None)

    async def unsave_recipe(self, user_id: str, recipe_id: str) -> ServiceResponse[None]:
        """Remove a saved recipe; a missing bookmark is not an error."""
        try:
            (
                self._db.table(SAVED)
                .delete()
                .eq("user_id", user_id)
                .eq("recipe_id", recipe_id)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=None)

    async def is_recipe_saved(self, user_id: str, recipe_id: str) -> ServiceResponse[bool]:
        """Check whether a user has saved a recipe."""
        try:
            result = (
                self._db.table(SAVED)
                .select("id")
                .eq("user_id", user_id)
                .eq("recipe_id", recipe_id)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=bool(result.data))

    async def get_user_saved_stats(self, user_id: str) -> ServiceResponse[SavedRecipeStats]:
        """Number of recipes a user has saved."""
        try:
            result = (
                self._db.table(SAVED)
                .select("*", count="exact", head=True)
                .eq("user_id", user_id)
                .execute()
            )
        except APIError as e:
            return ServiceResponse(error=self._to_error(e))

        return ServiceResponse(data=SavedRecipeStats(total_saved=result.count or 0))


def _embedded_count(value: Any) -> int:
    """Read ``[{"count": n}]`` as returned for an embedded count."""
    if isinstance(value, list) and value:
        return int(value[0].get("count", 0))
    if isinstance(value, dict):
        return int(value.get("count", 0))
    return 0


def _distribution(rows: Optional[list[dict[str, Any]]], field: str) -> dict[str, int]:
    """Count occurrences of each non-empty value of ``field``."""
    return dict(Counter(row[field] for row in rows or [] if row.get(field)))
