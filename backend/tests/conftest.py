"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock
import jwt  # PyJWT

from api.app import create_app
from api.dependencies import reset_container
from modules.auth.models import AuthResult
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    display_name: Optional[str] = None,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        display_name: Optional display name stored in user metadata
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "user_metadata": {"display_name": display_name} if display_name else {},
    }
    return jwt.encode(payload, secret, algorithm="HS256")


# -------------------------------------------------------------------------
# Supabase stand-ins
# -------------------------------------------------------------------------


def make_result(data: Any = None, count: Optional[int] = None) -> MagicMock:
    """Build an object shaped like a postgrest APIResponse."""
    return MagicMock(data=data if data is not None else [], count=count)


class QueryRecorder:
    """
    Stand-in for a postgrest query builder.

    Every chained call is recorded and returns the same builder, so tests
    can assert on the exact calls a service made. ``execute`` returns the
    configured result, or raises it when it is an exception.
    """

    def __init__(self, table: str = "", result: Any = None):
        self.table = table
        self.result = result if result is not None else make_result()
        self.calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        if name.startswith("__"):
            raise AttributeError(name)
        if name == "not_":
            self.calls.append(("not_", (), {}))
            return self

        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def execute(self):
        self.calls.append(("execute", (), {}))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def called(self, name: str) -> list[tuple[tuple, dict]]:
        """Arguments of every recorded call with the given method name."""
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    @property
    def names(self) -> list[str]:
        return [call for call, _, _ in self.calls]


class FakeSupabase:
    """
    Stand-in for the Supabase client's table API.

    Results are queued per table and handed out in the order the service
    builds its queries.
    """

    def __init__(self):
        self.queries: list[QueryRecorder] = []
        self._results: dict[str, list[Any]] = {}

    def returns(self, table: str, *results: Any) -> "FakeSupabase":
        self._results.setdefault(table, []).extend(results)
        return self

    def table(self, name: str) -> QueryRecorder:
        queued = self._results.get(name)
        query = QueryRecorder(name, queued.pop(0) if queued else None)
        self.queries.append(query)
        return query


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


# -------------------------------------------------------------------------
# Users and auth
# -------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def test_user(test_user_id: str, test_user_email: str) -> AuthenticatedUser:
    return AuthenticatedUser(id=test_user_id, email=test_user_email, display_name="Test User")


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    """Auth service double for an anonymous caller."""
    service = AsyncMock()
    service.get_current_user.return_value = AuthResult(
        success=False,
        error="Auth session missing!",
    )
    service.close = MagicMock()
    return service


@pytest.fixture
def signed_in_auth_service(mock_auth_service: AsyncMock, test_user: AuthenticatedUser) -> AsyncMock:
    """Auth service double for a signed-in caller."""
    mock_auth_service.get_current_user.return_value = AuthResult(success=True, user=test_user)
    return mock_auth_service
