import pytest
from pydantic import ValidationError

from modules.recipes.models import (
    CreateRecipeRequest,
    Recipe,
    RecipeListResponse,
    RecipeQueryOptions,
    SavedRecipe,
    SaveRecipeRequest,
    SortField,
    SortOrder,
    UpdateRecipeRequest,
    calculate_total_time,
)


def valid_recipe(**overrides):
    data = {
        "title": "Tomato Soup",
        "ingredients": [{"name": "tomato", "amount": "4"}],
        "instructions": [{"step": 1, "text": "Simmer"}],
    }
    data.update(overrides)
    return data


class TestCreateRecipeRequest:
    def test_minimal_recipe(self):
        request = CreateRecipeRequest(**valid_recipe())
        assert request.title == "Tomato Soup"

    def test_blank_title(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateRecipeRequest(**valid_recipe(title="   "))
        assert exc_info.value.errors()[0]["msg"] == "Title is required"

    def test_requires_an_ingredient(self):
        with pytest.raises(ValidationError):
            CreateRecipeRequest(**valid_recipe(ingredients=[]))

    def test_rejects_cook_time_over_a_day(self):
        with pytest.raises(ValidationError):
            CreateRecipeRequest(**valid_recipe(cook_time_minutes=1441))

    def test_rejects_bad_url(self):
        with pytest.raises(ValidationError):
            CreateRecipeRequest(**valid_recipe(image_url="not a url"))

    def test_to_row_contains_only_sent_fields(self):
        row = CreateRecipeRequest(**valid_recipe(image_url="https://example.com/soup.jpg")).to_row()
        assert set(row) == {"title", "ingredients", "instructions", "image_url"}
        assert row["image_url"] == "https://example.com/soup.jpg"


class TestUpdateRecipeRequest:
    def test_partial_update(self):
        request = UpdateRecipeRequest(servings=4)
        assert request.to_row() == {"servings": 4}

    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UpdateRecipeRequest()
        assert "At least one field must be provided" in str(exc_info.value)

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            UpdateRecipeRequest(title=" ")


class TestSaveRecipeRequest:
    def test_accepts_camel_case(self):
        assert SaveRecipeRequest.model_validate({"recipeId": "recipe-1"}).recipe_id == "recipe-1"

    def test_missing_recipe_id(self):
        with pytest.raises(ValidationError) as exc_info:
            SaveRecipeRequest.model_validate({})
        assert exc_info.value.errors()[0]["msg"] == "Recipe ID is required"


class TestQueryOptions:
    def test_defaults(self):
        options = RecipeQueryOptions()
        assert options.page == 1
        assert options.limit == 20
        assert options.sort_by == SortField.CREATED_AT
        assert options.sort_order == SortOrder.DESC

    @pytest.mark.parametrize("field, value", [("page", 0), ("limit", 0), ("limit", 101)])
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            RecipeQueryOptions(**{field: value})


class TestRecipeRows:
    def test_total_time_treats_missing_as_zero(self):
        recipe = Recipe(id="recipe-1", title="Salad", prep_time_minutes=10)
        assert calculate_total_time(recipe) == 10

    def test_saved_recipe_reads_joined_recipe(self):
        saved = SavedRecipe.model_validate({
            "id": "saved-1",
            "user_id": "user-123",
            "recipe_id": "recipe-1",
            "recipes": {"id": "recipe-1", "title": "Salad"},
        })
        assert saved.recipe.title == "Salad"

    def test_list_response_uses_camel_case(self):
        page = RecipeListResponse(recipes=[], total=0, page=1, limit=20, total_pages=0)
        dumped = page.model_dump(by_alias=True)
        assert dumped["totalPages"] == 0
        assert "recipesWithSaved" in dumped
