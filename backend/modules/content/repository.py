"""
Content repository for database access.

All three kinds of content share one `content` table; columns that don't
apply to a row's kind are null.
"""

from datetime import datetime, timezone
from typing import Optional, Any
from uuid import UUID

from shared.repository import BaseRepository
from .models import Content, ContentType, content_adapter


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True


class ContentRepository(BaseRepository[Content]):
    """
    Repository for content data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    def create(self, data: dict[str, Any]) -> Content:
        """
        Insert a content row.

        Args:
            data: Column values, including `type` and `user_id`

        Returns:
            Created Content with generated ID and timestamps.
        """
        result = self._execute(self._db.table("content").insert(data))
        return self._map_to_content(result.data[0])

    def get_by_id(self, content_id: str) -> Optional[Content]:
        """Get a post by ID, or None if missing or not a UUID."""
        if not _is_uuid(content_id):
            return None
        result = self._execute(
            self._db.table("content").select("*").eq("id", content_id)
        )
        if not result.data:
            return None
        return self._map_to_content(result.data[0])

    def list_by_user(
        self,
        user_id: str,
        content_type: Optional[ContentType] = None,
        include_unpublished: bool = False,
    ) -> list[Content]:
        """
        List a user's posts, newest first.

        Args:
            user_id: Owner user ID.
            content_type: Optional kind filter.
            include_unpublished: Whether to include drafts.
        """
        query = self._db.table("content").select("*").eq("user_id", user_id)
        if content_type:
            query = query.eq("type", content_type.value)
        if not include_unpublished:
            query = query.eq("published", True)

        result = self._execute(query.order("created_at", desc=True))
        return [self._map_to_content(row) for row in result.data]

    def list_published(
        self,
        content_type: Optional[ContentType] = None,
        limit: Optional[int] = None,
    ) -> list[Content]:
        """List published posts from every user, most recently published first."""
        query = self._db.table("content").select("*").eq("published", True)
        if content_type:
            query = query.eq("type", content_type.value)

        query = query.order("published_at", desc=True)
        if limit is not None:
            query = query.limit(limit)

        result = self._execute(query)
        return [self._map_to_content(row) for row in result.data]

    def update(self, content_id: str, data: dict[str, Any]) -> Optional[Content]:
        """
        Update a post and bump updated_at.

        Returns:
            Updated Content, or None if no row matched.
        """
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(
            self._db.table("content").update(data).eq("id", content_id)
        )
        if not result.data:
            return None
        return self._map_to_content(result.data[0])

    def delete(self, content_id: str) -> None:
        """Delete a post row."""
        self._execute(self._db.table("content").delete().eq("id", content_id))

    def _map_to_content(self, data: dict[str, Any]) -> Content:
        """Map database row to the matching Content model."""
        row = {key: value for key, value in data.items() if value is not None}
        row["id"] = str(data["id"])
        row["user_id"] = str(data["user_id"])
        return content_adapter.validate_python(row)
