"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The auth service is not held here: it is bound to the caller's token and
built per request by ``api.middleware.auth.get_auth_service``.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.recipes.interfaces import IRecipeService
    from modules.users.interfaces import IUserService


class ServiceContainer:
    """
    Container for process-wide service instances.

    Services are created lazily on first access and share the cached
    service-role Supabase client. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._user_service: "IUserService | None" = None
        self._recipe_service: "IRecipeService | None" = None

    @property
    def users(self) -> "IUserService":
        """Get the user profile service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            from shared.database import get_supabase_client
            self._user_service = UserService(get_supabase_client())
        return self._user_service

    @property
    def recipes(self) -> "IRecipeService":
        """Get the recipe service instance."""
        if self._recipe_service is None:
            from modules.recipes.service import RecipeService
            from shared.database import get_supabase_client
            self._recipe_service = RecipeService(get_supabase_client())
        return self._recipe_service

    def reset(self) -> None:
        """Drop cached services so the next access builds fresh ones."""
        self._user_service = None
        self._recipe_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_service() -> "IUserService":
    """FastAPI dependency for the user profile service."""
    return get_container().users


def get_recipe_service() -> "IRecipeService":
    """FastAPI dependency for the recipe service."""
    return get_container().recipes
