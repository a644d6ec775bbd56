"""
Recipes module.

Recipe listing, search, statistics, CRUD and per-user saved recipes.

Public API:
- IRecipeService: Interface for recipe operations
- Recipe / RecipeQueryOptions / RecipeFilters: Core models
- Filter predicates: Equals, AtMost, ContainsAll, TextMatch
- Recipe exceptions: RecipeNotFoundError, RecipeAlreadySavedError, ...
"""

from .interfaces import IRecipeService
from .filters import (
    AtMost,
    ContainsAll,
    Equals,
    FilterPredicate,
    TextMatch,
    apply_predicates,
    build_predicates,
)
from .models import (
    CreateRecipeRequest,
    Difficulty,
    MealType,
    Recipe,
    RecipeFilters,
    RecipeQueryOptions,
    SavedRecipe,
    SortField,
    SortOrder,
    UpdateRecipeRequest,
)
from .exceptions import (
    RecipeAlreadySavedError,
    RecipeBackendError,
    RecipeNotFoundError,
    RecipeNotSavedError,
)

__all__ = [
    # Interface
    "IRecipeService",
    # Filters
    "AtMost",
    "ContainsAll",
    "Equals",
    "FilterPredicate",
    "TextMatch",
    "apply_predicates",
    "build_predicates",
    # Models
    "CreateRecipeRequest",
    "Difficulty",
    "MealType",
    "Recipe",
    "RecipeFilters",
    "RecipeQueryOptions",
    "SavedRecipe",
    "SortField",
    "SortOrder",
    "UpdateRecipeRequest",
    # Exceptions
    "RecipeAlreadySavedError",
    "RecipeBackendError",
    "RecipeNotFoundError",
    "RecipeNotSavedError",
]
