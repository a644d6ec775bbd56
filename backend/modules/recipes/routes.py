"""
Recipe API endpoints.

Listing, search and statistics are public; creating, editing, deleting and
the saved-recipe endpoints require a signed-in user.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_recipe_service
from api.middleware.auth import get_current_user, get_optional_user
from shared.config import get_settings
from shared.models import AuthenticatedUser, ServiceError

from .exceptions import (
    RecipeAlreadySavedError,
    RecipeBackendError,
    RecipeNotFoundError,
    RecipeNotSavedError,
)
from .interfaces import IRecipeService
from .models import (
    CreateRecipeRequest,
    Difficulty,
    MAX_MINUTES,
    MealType,
    PopularRecipesResponse,
    Recipe,
    RecipeListResponse,
    RecipeMessageResponse,
    RecipeQueryOptions,
    RecipeSearchResponse,
    RecipeStats,
    SavedRecipeStats,
    SavedRecipesResponse,
    SavedStatusResponse,
    SaveRecipeRequest,
    SaveRecipeResponse,
    SortField,
    SortOrder,
    UpdateRecipeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _backend_error(message: str, error: Optional[ServiceError]) -> RecipeBackendError:
    """Log the backend's message and build the generic client-facing error."""
    backend_message = error.message if error else None
    logger.error("%s: %s", message, backend_message or "no data returned")
    return RecipeBackendError(message, backend_message)


def recipe_query_options(
    search: Optional[str] = Query(default=None, description="Match against recipe title"),
    meal_type: Optional[MealType] = Query(default=None, alias="mealType"),
    dietary_tags: Optional[str] = Query(
        default=None,
        alias="dietaryTags",
        description="Comma-separated tags; recipes must carry all of them",
    ),
    difficulty: Optional[Difficulty] = Query(default=None),
    max_cook_time: Optional[int] = Query(default=None, alias="maxCookTime", ge=0, le=MAX_MINUTES),
    max_prep_time: Optional[int] = Query(default=None, alias="maxPrepTime", ge=0, le=MAX_MINUTES),
    cuisine: Optional[str] = Query(default=None),
    servings: Optional[int] = Query(default=None, ge=1, le=50),
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Items per page"),
    sort_by: SortField = Query(default=SortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(default=SortOrder.DESC, alias="sortOrder"),
) -> RecipeQueryOptions:
    """Collect listing query parameters into RecipeQueryOptions."""
    tags = [tag.strip() for tag in dietary_tags.split(",") if tag.strip()] if dietary_tags else None
    return RecipeQueryOptions(
        search=search,
        meal_type=meal_type,
        dietary_tags=tags,
        difficulty=difficulty,
        max_cook_time=max_cook_time,
        max_prep_time=max_prep_time,
        cuisine=cuisine,
        servings=servings,
        page=page,
        limit=limit or get_settings().default_page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )


# -------------------------------------------------------------------------
# Collection
# -------------------------------------------------------------------------


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    options: RecipeQueryOptions = Depends(recipe_query_options),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    """
    List recipes with filters, sorting and pagination.

    Signed-in callers also get ``recipesWithSaved`` with per-recipe saved
    flags and total times.
    """
    if user is not None:
        result = await service.get_recipes_with_saved_status(user.id, options)
    else:
        result = await service.get_all_recipes(options)

    if result.error or result.data is None:
        raise _backend_error("Failed to fetch recipes", result.error)
    return result.data


@router.post("", response_model=Recipe, status_code=201)
async def create_recipe(
    request: CreateRecipeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> Recipe:
    """Create a recipe."""
    result = await service.create_recipe(request)
    if result.error or result.data is None:
        raise _backend_error("Failed to create recipe", result.error)
    return result.data


@router.get("/search", response_model=RecipeSearchResponse)
async def search_recipes(
    q: str = Query(..., min_length=1, description="Text matched against title and description"),
    limit: int = Query(default=20, ge=1, le=100),
    service: IRecipeService = Depends(get_recipe_service),
) -> RecipeSearchResponse:
    """Search recipes by title or description, newest first."""
    result = await service.search_recipes(q, limit)
    if result.error or result.data is None:
        raise _backend_error("Failed to search recipes", result.error)
    return RecipeSearchResponse(recipes=result.data, count=len(result.data))


@router.get("/popular", response_model=PopularRecipesResponse)
async def popular_recipes(
    limit: int = Query(default=10, ge=1, le=50),
    service: IRecipeService = Depends(get_recipe_service),
) -> PopularRecipesResponse:
    """Recent recipes ordered by how often they were saved."""
    result = await service.get_popular_recipes(limit)
    if result.error or result.data is None:
        raise _backend_error("Failed to fetch popular recipes", result.error)
    return PopularRecipesResponse(recipes=result.data)


@router.get("/stats", response_model=RecipeStats)
async def recipe_stats(
    service: IRecipeService = Depends(get_recipe_service),
) -> RecipeStats:
    """Recipe totals by meal type and difficulty."""
    result = await service.get_recipe_stats()
    if result.error or result.data is None:
        raise _backend_error("Failed to fetch recipe statistics", result.error)
    return result.data


# -------------------------------------------------------------------------
# Saved recipes
# -------------------------------------------------------------------------


@router.get("/saved", response_model=SavedRecipesResponse)
async def list_saved_recipes(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> SavedRecipesResponse:
    """The current user's saved recipes, most recently saved first."""
    result = await service.get_user_saved_recipes(user.id)
    if result.error or result.data is None:
        raise _backend_error("Failed to fetch saved recipes", result.error)
    return SavedRecipesResponse(saved_recipes=result.data, count=len(result.data))


@router.post("/saved", response_model=SaveRecipeResponse, status_code=201)
async def save_recipe(
    request: SaveRecipeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> SaveRecipeResponse:
    """
    Save a recipe for the current user.

    The recipe must exist; saving it a second time is a conflict.
    """
    existing = await service.get_recipe_by_id(request.recipe_id)
    if existing.error:
        raise _backend_error("Failed to save recipe", existing.error)
    if existing.data is None:
        raise RecipeNotFoundError(request.recipe_id)

    result = await service.save_recipe(user.id, request.recipe_id)
    if result.error and result.error.is_conflict:
        raise RecipeAlreadySavedError(request.recipe_id)
    if result.error:
        raise _backend_error("Failed to save recipe", result.error)

    return SaveRecipeResponse(message="Recipe saved successfully", saved_recipe=result.data)


@router.get("/saved/stats", response_model=SavedRecipeStats)
async def saved_recipe_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> SavedRecipeStats:
    """How many recipes the current user has saved."""
    result = await service.get_user_saved_stats(user.id)
    if result.error or result.data is None:
        raise _backend_error("Failed to fetch saved recipe statistics", result.error)
    return result.data


# PUT and DELETE on these paths would otherwise match the "{recipe_id}" routes.
_FIXED_PATH_METHODS = {
    "/search": ("GET",),
    "/popular": ("GET",),
    "/stats": ("GET",),
    "/saved": ("GET", "POST"),
    "/saved/stats": ("GET",),
}


def _method_not_allowed_route(allowed: tuple[str, ...]):
    async def method_not_allowed() -> None:
        raise HTTPException(status_code=405, headers={"Allow": ", ".join(allowed)})

    return method_not_allowed


for _path, _allowed in _FIXED_PATH_METHODS.items():
    router.add_api_route(
        _path,
        _method_not_allowed_route(_allowed),
        methods=[m for m in ("PUT", "DELETE") if m not in _allowed],
        include_in_schema=False,
    )


@router.get("/saved/{recipe_id}", response_model=SavedStatusResponse)
async def get_saved_status(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> SavedStatusResponse:
    """Whether the current user has saved a recipe."""
    result = await service.is_recipe_saved(user.id, recipe_id)
    if result.error or result.data is None:
        raise _backend_error("Failed to check saved status", result.error)
    return SavedStatusResponse(is_saved=result.data, recipe_id=recipe_id)


@router.delete("/saved/{recipe_id}", response_model=RecipeMessageResponse)
async def unsave_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> RecipeMessageResponse:
    """
    Remove a recipe from the current user's saved list.

    The saved check and the delete are separate calls, so two concurrent
    requests can both pass the check.
    """
    saved = await service.is_recipe_saved(user.id, recipe_id)
    if saved.error:
        raise _backend_error("Failed to unsave recipe", saved.error)
    if not saved.data:
        raise RecipeNotSavedError(recipe_id)

    result = await service.unsave_recipe(user.id, recipe_id)
    if result.error:
        raise _backend_error("Failed to unsave recipe", result.error)
    return RecipeMessageResponse(message="Recipe unsaved successfully")


# -------------------------------------------------------------------------
# Single recipe
# -------------------------------------------------------------------------


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(
    recipe_id: str,
    service: IRecipeService = Depends(get_recipe_service),
) -> Recipe:
    """Get a recipe by ID."""
    result = await service.get_recipe_by_id(recipe_id)
    if result.error:
        raise _backend_error("Failed to fetch recipe", result.error)
    if result.data is None:
        raise RecipeNotFoundError(recipe_id)
    return result.data


@router.put("/{recipe_id}", response_model=Recipe)
async def update_recipe(
    recipe_id: str,
    request: UpdateRecipeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> Recipe:
    """Update the given fields of a recipe."""
    result = await service.update_recipe(recipe_id, request)
    if result.error:
        raise _backend_error("Failed to update recipe", result.error)
    if result.data is None:
        raise RecipeNotFoundError(recipe_id)
    return result.data


@router.delete("/{recipe_id}", response_model=RecipeMessageResponse)
async def delete_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IRecipeService = Depends(get_recipe_service),
) -> RecipeMessageResponse:
    """Delete a recipe. Deleting a recipe that does not exist also succeeds."""
    result = await service.delete_recipe(recipe_id)
    if result.error:
        raise _backend_error("Failed to delete recipe", result.error)
    return RecipeMessageResponse(message="Recipe deleted successfully")
