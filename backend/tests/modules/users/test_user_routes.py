"""
Tests for user profile endpoints.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from api.dependencies import get_user_service
from api.middleware.auth import get_auth_service
from modules.users.models import UserProfile, UserResult, VALID_DIETARY_RESTRICTIONS
from modules.users.service import UserService
from shared.models import BasicResult


@pytest.fixture
def user_service() -> AsyncMock:
    service = AsyncMock()
    service.get_valid_dietary_restrictions = lambda: list(VALID_DIETARY_RESTRICTIONS)
    return service


@pytest.fixture
def profile(test_user_id, test_user_email) -> UserProfile:
    return UserProfile(
        id=test_user_id,
        email=test_user_email,
        display_name="Test User",
        dietary_restrictions=["vegan"],
    )


def make_client(app, auth_service, user_service) -> TestClient:
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    return TestClient(app, raise_server_exceptions=False)


class TestGetProfile:
    """Tests for GET /api/users/me"""

    def test_requires_authentication(self, app, mock_auth_service, user_service):
        client = make_client(app, mock_auth_service, user_service)

        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        user_service.get_user_profile.assert_not_called()

    def test_returns_profile(self, app, signed_in_auth_service, user_service, profile):
        user_service.get_user_profile.return_value = UserResult(success=True, user=profile)
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.get("/api/users/me")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "test-user-123"
        assert data["dietary_restrictions"] == ["vegan"]

    def test_missing_profile(self, app, signed_in_auth_service, user_service):
        user_service.get_user_profile.return_value = UserResult(
            success=False,
            error="User not found",
            not_found=True,
        )
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.get("/api/users/me")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_backend_failure_is_generic(self, app, signed_in_auth_service, user_service):
        user_service.get_user_profile.return_value = UserResult(
            success=False,
            error="connection reset by peer",
        )
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.get("/api/users/me")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch user profile"}


class TestUpdateProfile:
    """Tests for PATCH /api/users/me"""

    def test_updates_profile(self, app, signed_in_auth_service, user_service, profile):
        updated = profile.model_copy(update={"display_name": "New Name"})
        user_service.update_user_profile.return_value = UserResult(success=True, user=updated)
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.patch("/api/users/me", json={"display_name": "New Name"})

        assert response.status_code == 200
        assert response.json()["display_name"] == "New Name"
        user_id, updates = user_service.update_user_profile.call_args.args
        assert user_id == "test-user-123"
        assert updates.display_name == "New Name"

    def test_invalid_update(self, app, signed_in_auth_service, user_service):
        user_service.update_user_profile.return_value = UserResult(
            success=False,
            error="Display name cannot exceed 100 characters",
        )
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.patch("/api/users/me", json={"display_name": "x" * 101})

        assert response.status_code == 400
        assert response.json() == {"error": "Display name cannot exceed 100 characters"}

    def test_no_matching_profile(self, app, signed_in_auth_service, user_service):
        user_service.update_user_profile.return_value = UserResult(
            success=False,
            error="User not found or update failed",
            not_found=True,
        )
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.patch("/api/users/me", json={"dietary_restrictions": []})

        assert response.status_code == 404

    def test_backend_failure_is_generic(self, app, signed_in_auth_service, user_service):
        user_service.update_user_profile.return_value = UserResult(
            success=False,
            error="permission denied for table users",
            backend_error=True,
        )
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.patch("/api/users/me", json={"display_name": "New Name"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update user profile"}


class TestDeleteProfile:
    """Tests for DELETE /api/users/me"""

    def test_deletes_profile(self, app, signed_in_auth_service, user_service):
        user_service.delete_user_profile.return_value = BasicResult(success=True)
        client = make_client(app, signed_in_auth_service, user_service)

        response = client.delete("/api/users/me")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Profile deleted successfully"}

    def test_backend_failure_is_generic(self, app, signed_in_auth_service, fake_db):
        fake_db.returns(
            "users",
            APIError({"message": "permission denied for table users", "code": "42501"}),
        )
        client = make_client(app, signed_in_auth_service, UserService(fake_db))

        response = client.delete("/api/users/me")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete user profile"}


class TestDietaryRestrictions:
    """Tests for GET /api/users/dietary-restrictions"""

    def test_lists_allow_list_without_auth(self, app, mock_auth_service, user_service):
        client = make_client(app, mock_auth_service, user_service)

        response = client.get("/api/users/dietary-restrictions")

        assert response.status_code == 200
        assert response.json()["restrictions"] == list(VALID_DIETARY_RESTRICTIONS)
