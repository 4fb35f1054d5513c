"""
Subscriber repository for database access.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Subscriber


class SubscriberRepository(BaseRepository[Subscriber]):
    """Repository for the `subscribers` table."""

    def get_by_email(self, email: str) -> Optional[Subscriber]:
        """Get a subscriber by (already lowercased) email, or None."""
        result = self._execute(
            self._db.table("subscribers").select("*").eq("email", email)
        )
        if not result.data:
            return None
        return self._map_to_subscriber(result.data[0])

    def create(self, email: str) -> Subscriber:
        """
        Insert a subscriber.

        Raises:
            ConflictError: If the address is already present
        """
        result = self._execute(
            self._db.table("subscribers").insert({"email": email})
        )
        return self._map_to_subscriber(result.data[0])

    def list_all(self) -> list[Subscriber]:
        """Every subscriber, newest first."""
        result = self._execute(
            self._db.table("subscribers").select("*").order("created_at", desc=True)
        )
        return [self._map_to_subscriber(row) for row in result.data]

    def _map_to_subscriber(self, data: dict[str, Any]) -> Subscriber:
        return Subscriber(
            id=str(data["id"]),
            email=data["email"],
            created_at=data["created_at"],
        )
