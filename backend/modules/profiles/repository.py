"""
Profile repository for database access.

Encapsulates all Supabase queries for the profile tables:
- profiles
- handles (registry mapping a handle to its owning user id)
"""

from datetime import datetime, timezone
from typing import Optional, Any

from shared.exceptions import ConflictError
from shared.repository import BaseRepository
from .exceptions import HandleTakenError
from .models import UserProfile


class ProfileRepository(BaseRepository[UserProfile]):
    """
    Repository for profile and handle registry data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    # -------------------------------------------------------------------------
    # Profile operations
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> UserProfile:
        """
        Insert a profile row.

        Args:
            data: Profile fields (uid, email, first_name, last_name, ...)

        Returns:
            Created UserProfile with timestamps.
        """
        result = self._execute(self._db.table("profiles").insert(data))
        return self._map_to_profile(result.data[0])

    def get_by_uid(self, uid: str) -> Optional[UserProfile]:
        """Get a profile by user ID, or None if missing."""
        result = self._execute(self._db.table("profiles").select("*").eq("uid", uid))
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def get_many(self, uids: list[str]) -> list[UserProfile]:
        """Get profiles for a list of user IDs (order not guaranteed)."""
        if not uids:
            return []
        result = self._execute(self._db.table("profiles").select("*").in_("uid", uids))
        return [self._map_to_profile(row) for row in result.data]

    def list_all(self) -> list[UserProfile]:
        """Get every profile, oldest first."""
        result = self._execute(
            self._db.table("profiles").select("*").order("created_at")
        )
        return [self._map_to_profile(row) for row in result.data]

    def update(self, uid: str, data: dict[str, Any]) -> Optional[UserProfile]:
        """
        Update profile fields and bump updated_at.

        Returns:
            Updated profile, or None if no row matched.
        """
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(self._db.table("profiles").update(data).eq("uid", uid))
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    # -------------------------------------------------------------------------
    # Handle registry operations
    # -------------------------------------------------------------------------

    def get_handle_owner(self, handle: str) -> Optional[str]:
        """Return the uid that reserved a handle, or None."""
        result = self._execute(
            self._db.table("handles").select("uid").eq("handle", handle)
        )
        if not result.data:
            return None
        return str(result.data[0]["uid"])

    def reserve_handle(self, handle: str, uid: str) -> None:
        """
        Insert a registry row for a handle.

        Raises:
            HandleTakenError: If the handle is already reserved.
        """
        try:
            self._execute(
                self._db.table("handles").insert({"handle": handle, "uid": uid})
            )
        except ConflictError as e:
            raise HandleTakenError(handle) from e

    def release_handle(self, handle: str, uid: str) -> None:
        """Delete a registry row, only if it belongs to the given user."""
        self._execute(
            self._db.table("handles").delete().eq("handle", handle).eq("uid", uid)
        )

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        """Map database row to UserProfile model."""
        return UserProfile(
            uid=str(data["uid"]),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            email=data["email"],
            handle=data.get("handle"),
            photo_url=data.get("photo_url"),
            bio=data.get("bio"),
            tagline=data.get("tagline"),
            headline=data.get("headline"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
