"""
Tests for saved recipe endpoints.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.dependencies import get_recipe_service
from api.middleware.auth import get_auth_service
from modules.recipes.models import Recipe, SavedRecipe, SavedRecipeStats
from shared.models import ServiceError, ServiceResponse

DUPLICATE = ServiceError(
    message='duplicate key value violates unique constraint "user_saved_recipes_pkey"',
    code="23505",
)


@pytest.fixture
def recipe_service() -> AsyncMock:
    service = AsyncMock()
    service.get_recipe_by_id.return_value = ServiceResponse(
        data=Recipe(id="recipe-1", title="Tomato Soup"),
    )
    return service


@pytest.fixture
def saved() -> SavedRecipe:
    return SavedRecipe(
        id="saved-1",
        user_id="test-user-123",
        recipe_id="recipe-1",
        recipe=Recipe(id="recipe-1", title="Tomato Soup"),
    )


@pytest.fixture
def client(app, signed_in_auth_service, recipe_service) -> TestClient:
    app.dependency_overrides[get_auth_service] = lambda: signed_in_auth_service
    app.dependency_overrides[get_recipe_service] = lambda: recipe_service
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def anonymous_client(app, mock_auth_service, recipe_service) -> TestClient:
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    app.dependency_overrides[get_recipe_service] = lambda: recipe_service
    return TestClient(app, raise_server_exceptions=False)


class TestAuthenticationRequired:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/recipes/saved"),
            ("get", "/api/recipes/saved/recipe-1"),
            ("delete", "/api/recipes/saved/recipe-1"),
            ("get", "/api/recipes/saved/stats"),
        ],
    )
    def test_unauthenticated(self, anonymous_client, method, path):
        response = getattr(anonymous_client, method)(path)

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_unauthenticated_save(self, anonymous_client, recipe_service):
        response = anonymous_client.post("/api/recipes/saved", json={"recipeId": "recipe-1"})

        assert response.status_code == 401
        recipe_service.save_recipe.assert_not_called()


class TestListSaved:
    def test_lists_saved_recipes(self, client, recipe_service, saved):
        recipe_service.get_user_saved_recipes.return_value = ServiceResponse(data=[saved])

        response = client.get("/api/recipes/saved")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["savedRecipes"][0]["recipe"]["title"] == "Tomato Soup"
        recipe_service.get_user_saved_recipes.assert_called_once_with("test-user-123")

    def test_saved_stats(self, client, recipe_service):
        recipe_service.get_user_saved_stats.return_value = ServiceResponse(
            data=SavedRecipeStats(total_saved=4),
        )

        response = client.get("/api/recipes/saved/stats")

        assert response.status_code == 200
        assert response.json() == {"totalSaved": 4}


class TestSaveRecipe:
    def test_save(self, client, recipe_service, saved):
        recipe_service.save_recipe.return_value = ServiceResponse(data=saved)

        response = client.post("/api/recipes/saved", json={"recipeId": "recipe-1"})

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Recipe saved successfully"
        assert data["savedRecipe"]["recipe_id"] == "recipe-1"
        recipe_service.save_recipe.assert_called_once_with("test-user-123", "recipe-1")

    def test_save_twice_conflicts(self, client, recipe_service, saved):
        recipe_service.save_recipe.side_effect = [
            ServiceResponse(data=saved),
            ServiceResponse(error=DUPLICATE),
        ]

        first = client.post("/api/recipes/saved", json={"recipeId": "recipe-1"})
        second = client.post("/api/recipes/saved", json={"recipeId": "recipe-1"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"error": "Recipe is already saved"}

    def test_save_missing_recipe(self, client, recipe_service):
        recipe_service.get_recipe_by_id.return_value = ServiceResponse(data=None)

        response = client.post("/api/recipes/saved", json={"recipeId": "missing"})

        assert response.status_code == 404
        assert response.json() == {"error": "Recipe not found"}
        recipe_service.save_recipe.assert_not_called()

    def test_save_requires_recipe_id(self, client, recipe_service):
        response = client.post("/api/recipes/saved", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Recipe ID is required"

    def test_save_backend_error(self, client, recipe_service):
        recipe_service.save_recipe.return_value = ServiceResponse(
            error=ServiceError(message="insert failed", code="XX000"),
        )

        response = client.post("/api/recipes/saved", json={"recipeId": "recipe-1"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save recipe"}


class TestSavedStatus:
    def test_is_saved(self, client, recipe_service):
        recipe_service.is_recipe_saved.return_value = ServiceResponse(data=True)

        response = client.get("/api/recipes/saved/recipe-1")

        assert response.status_code == 200
        assert response.json() == {"isSaved": True, "recipeId": "recipe-1"}

    def test_not_saved(self, client, recipe_service):
        recipe_service.is_recipe_saved.return_value = ServiceResponse(data=False)

        response = client.get("/api/recipes/saved/recipe-1")

        assert response.json() == {"isSaved": False, "recipeId": "recipe-1"}


class TestUnsaveRecipe:
    def test_unsave(self, client, recipe_service):
        recipe_service.is_recipe_saved.return_value = ServiceResponse(data=True)
        recipe_service.unsave_recipe.return_value = ServiceResponse(data=None)

        response = client.delete("/api/recipes/saved/recipe-1")

        assert response.status_code == 200
        assert response.json() == {"message": "Recipe unsaved successfully"}
        recipe_service.unsave_recipe.assert_called_once_with("test-user-123", "recipe-1")

    def test_unsave_when_not_saved(self, client, recipe_service):
        recipe_service.is_recipe_saved.return_value = ServiceResponse(data=False)

        response = client.delete("/api/recipes/saved/recipe-1")

        assert response.status_code == 404
        assert response.json() == {"error": "Recipe is not saved"}
        recipe_service.unsave_recipe.assert_not_called()
