"""
Base class for Supabase-backed services.

Provides a common abstraction layer for the data services, encapsulating
Supabase client access and the conversion of backend-reported errors
into result envelopes.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import AuthError, Client

from .models import ServiceError

logger = logging.getLogger(__name__)


class SupabaseService:
    """
    Base class for all Supabase-backed services.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Mapping of PostgREST / Auth errors to ServiceError

    Subclasses catch backend errors and return envelopes. Transport
    failures (network faults) are not caught here and propagate to
    the API layer.

    Example:
        class RecipeService(SupabaseService):
            async def get_recipe_by_id(self, recipe_id: str) -> ServiceResponse[Recipe]:
                try:
                    result = self._db.table("recipes").select("*").eq("id", recipe_id).execute()
                except APIError as e:
                    return ServiceResponse(error=self._to_error(e))
                ...
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the service with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _to_error(exc: APIError | AuthError) -> ServiceError:
        """Convert a backend-reported error into a ServiceError."""
        message = getattr(exc, "message", None) or str(exc)
        code = getattr(exc, "code", None)
        logger.debug("Backend error (%s): %s", code, message)
        return ServiceError(message=message, code=str(code) if code is not None else None)

    @staticmethod
    def _first(rows: Optional[list[dict[str, Any]]]) -> Optional[dict[str, Any]]:
        """Return the first row of a result, or None if empty."""
        if not rows:
            return None
        return rows[0]
