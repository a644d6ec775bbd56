"""
Recipes module data models.

Request bodies carry the validation rules for recipes; response models use
camelCase aliases where the public API exposes camelCase keys.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

MAX_MINUTES = 1440


class Difficulty(str, Enum):
    """Recipe difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MealType(str, Enum):
    """Meal a recipe is intended for."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"


class SortField(str, Enum):
    """Columns a recipe listing can be ordered by."""

    CREATED_AT = "created_at"
    TITLE = "title"
    COOK_TIME = "cook_time_minutes"
    DIFFICULTY = "difficulty_level"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CamelModel(BaseModel):
    """Base for models with camelCase aliases, constructible by field name."""

    model_config = ConfigDict(populate_by_name=True)


# -------------------------------------------------------------------------
# Recipe parts
# -------------------------------------------------------------------------


class RecipeIngredient(BaseModel):
    """A single ingredient line."""

    name: str = Field(..., min_length=1, description="Ingredient name")
    amount: str = Field(..., min_length=1, description="Quantity as written, e.g. '1 1/2'")
    unit: Optional[str] = None
    notes: Optional[str] = None


class RecipeInstruction(BaseModel):
    """A single numbered step."""

    step: int = Field(..., ge=1, description="Step number (1-indexed)")
    text: str = Field(..., min_length=1, description="Instruction text")
    time_minutes: Optional[int] = Field(None, ge=0)


# -------------------------------------------------------------------------
# Recipe rows
# -------------------------------------------------------------------------


class Recipe(BaseModel):
    """Row of the ``recipes`` table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: Optional[str] = None
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: list[RecipeInstruction] = Field(default_factory=list)
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    servings: Optional[int] = None
    difficulty_level: Optional[Difficulty] = None
    cuisine_type: Optional[str] = None
    meal_type: Optional[MealType] = None
    dietary_tags: Optional[list[str]] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def calculate_total_time(recipe: Recipe) -> int:
    """Prep plus cook time, treating missing values as zero."""
    return (recipe.prep_time_minutes or 0) + (recipe.cook_time_minutes or 0)


class RecipeWithSaved(Recipe):
    """Recipe annotated for a specific user."""

    is_saved: bool = False
    total_time_minutes: int = 0


class PopularRecipe(Recipe):
    """Recipe with the number of users who saved it."""

    save_count: int = 0


class SavedRecipe(BaseModel):
    """Row of ``user_saved_recipes``, optionally with the joined recipe."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    recipe_id: str
    created_at: Optional[datetime] = None
    recipe: Optional[Recipe] = Field(
        None,
        validation_alias=AliasChoices("recipe", "recipes"),
    )


# -------------------------------------------------------------------------
# Request bodies
# -------------------------------------------------------------------------


class CreateRecipeRequest(BaseModel):
    """Request body for POST /api/recipes."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    ingredients: list[RecipeIngredient] = Field(..., min_length=1)
    instructions: list[RecipeInstruction] = Field(..., min_length=1)
    prep_time_minutes: Optional[int] = Field(None, ge=0, le=MAX_MINUTES)
    cook_time_minutes: Optional[int] = Field(None, ge=0, le=MAX_MINUTES)
    servings: Optional[int] = Field(None, ge=1, le=50)
    difficulty_level: Optional[Difficulty] = None
    cuisine_type: Optional[str] = Field(None, max_length=100)
    meal_type: Optional[MealType] = None
    dietary_tags: Optional[list[str]] = None
    source_url: Optional[HttpUrl] = None
    source_name: Optional[str] = Field(None, max_length=200)
    image_url: Optional[HttpUrl] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("title_required", "Title is required")
        return value

    def to_row(self) -> dict[str, Any]:
        """Columns to write, JSON-ready, limited to fields the caller sent."""
        return self.model_dump(mode="json", exclude_unset=True)


class UpdateRecipeRequest(CreateRecipeRequest):
    """Request body for PUT /api/recipes/{id}; every field is optional."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)  # type: ignore[assignment]
    ingredients: Optional[list[RecipeIngredient]] = Field(None, min_length=1)  # type: ignore[assignment]
    instructions: Optional[list[RecipeInstruction]] = Field(None, min_length=1)  # type: ignore[assignment]

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise PydanticCustomError("title_required", "Title is required")
        return value

    @model_validator(mode="after")
    def check_not_empty(self) -> "UpdateRecipeRequest":
        if not self.model_fields_set:
            raise PydanticCustomError("empty_update", "At least one field must be provided")
        return self


class SaveRecipeRequest(CamelModel):
    """Request body for POST /api/recipes/saved."""

    recipe_id: str = Field("", alias="recipeId", validate_default=True)

    @field_validator("recipe_id")
    @classmethod
    def check_recipe_id(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("recipe_id_required", "Recipe ID is required")
        return value


# -------------------------------------------------------------------------
# Query options
# -------------------------------------------------------------------------


class RecipeFilters(BaseModel):
    """Filters recognised by recipe listings. All apply conjunctively."""

    search: Optional[str] = None
    meal_type: Optional[MealType] = None
    dietary_tags: Optional[list[str]] = None
    difficulty: Optional[Difficulty] = None
    max_cook_time: Optional[int] = Field(None, ge=0, le=MAX_MINUTES)
    max_prep_time: Optional[int] = Field(None, ge=0, le=MAX_MINUTES)
    cuisine: Optional[str] = None
    servings: Optional[int] = Field(None, ge=1, le=50)


class RecipeQueryOptions(RecipeFilters):
    """Filters plus pagination and sorting."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


# -------------------------------------------------------------------------
# Responses
# -------------------------------------------------------------------------


class RecipeListResponse(CamelModel):
    """One page of recipes."""

    recipes: list[Recipe]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")
    recipes_with_saved: Optional[list[RecipeWithSaved]] = Field(None, alias="recipesWithSaved")


class RecipeSearchResponse(BaseModel):
    recipes: list[Recipe]
    count: int


class PopularRecipesResponse(BaseModel):
    recipes: list[PopularRecipe]


class RecipeStats(CamelModel):
    total_count: int = Field(..., alias="totalCount")
    meal_type_distribution: dict[str, int] = Field(..., alias="mealTypeDistribution")
    difficulty_distribution: dict[str, int] = Field(..., alias="difficultyDistribution")


class SavedRecipeStats(CamelModel):
    total_saved: int = Field(..., alias="totalSaved")


class SavedRecipesResponse(CamelModel):
    saved_recipes: list[SavedRecipe] = Field(..., alias="savedRecipes")
    count: int


class SaveRecipeResponse(CamelModel):
    message: str
    saved_recipe: Optional[SavedRecipe] = Field(None, alias="savedRecipe")


class SavedStatusResponse(CamelModel):
    is_saved: bool = Field(..., alias="isSaved")
    recipe_id: str = Field(..., alias="recipeId")


class RecipeMessageResponse(BaseModel):
    message: str
