"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic, Any, Optional
from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Postgres invalid_text_representation, raised for a malformed UUID literal
INVALID_TEXT_REPRESENTATION = "22P02"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally, so nothing above the
    repository ever sees a raw row.

    Example:
        class IOURepository(BaseRepository[IOU]):
            def get_by_id(self, iou_id: str) -> Optional[IOU]:
                result = self._db.table("iou_ious").select("*").eq("id", iou_id).execute()
                if not result.data:
                    return None
                return self._map_to_iou(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _now() -> str:
        """Current UTC time as an ISO-8601 string for timestamp columns."""
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _first(data: Any) -> Optional[dict[str, Any]]:
        """
        Collapse an embedded relation to a single row.

        PostgREST returns a to-one embed as an object, but some query shapes
        yield a one-element list instead. Resolve it here, once.
        """
        if isinstance(data, list):
            return data[0] if data else None
        return data or None

    @staticmethod
    def _rows_by_id(query: Any) -> list[dict[str, Any]]:
        """
        Execute a query filtered on a caller-supplied UUID.

        A malformed id cannot match any row, so it yields no rows instead of
        surfacing the database's type error.
        """
        try:
            return query.execute().data or []
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return []
            raise
