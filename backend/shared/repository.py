"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating PostgREST failures into the
application's exception hierarchy.
"""

import logging
from typing import TypeVar, Generic, Any

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, ExternalServiceError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() to run a query builder with consistent error mapping

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ContentRepository(BaseRepository[Content]):
            def get_by_id(self, content_id: str) -> Optional[Content]:
                result = self._execute(
                    self._db.table("content").select("*").eq("id", content_id)
                )
                if not result.data:
                    return None
                return self._map_to_content(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query builder.

        Raises:
            ConflictError: On a unique constraint violation.
            ExternalServiceError: On any other PostgREST error.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(e.message or "Duplicate record", code="CONFLICT") from e
            logger.error("Supabase query failed: %s (code=%s)", e.message, e.code)
            raise ExternalServiceError(
                e.message or "Database request failed",
                service="supabase",
                code="DATABASE_ERROR",
                details={"db_code": e.code},
            ) from e
