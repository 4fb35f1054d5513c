"""
Profiles module interface.

Other modules (auth, content) depend on IProfileService for profile lookups
and for the ownership gate.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.storage import UploadedFile

from .models import UserProfile, ProfileUpdate


@runtime_checkable
class IProfileService(Protocol):
    """Interface for profile and handle operations."""

    async def create_profile(
        self,
        uid: str,
        email: str,
        first_name: str,
        last_name: str,
        photo_url: Optional[str] = None,
    ) -> UserProfile:
        """Create the profile row for a newly registered user (no handle yet)."""
        ...

    async def get_profile(self, uid: str) -> Optional[UserProfile]:
        """Get a profile by user ID."""
        ...

    async def get_profile_by_handle(self, handle: str) -> Optional[UserProfile]:
        """
        Resolve a handle through the registry and return its profile.

        Returns:
            UserProfile, or None if the handle or the profile is missing
        """
        ...

    async def check_handle_available(self, handle: str) -> bool:
        """
        Check whether a handle can be claimed.

        Raises:
            InvalidHandleError: If the handle format is invalid
        """
        ...

    async def claim_handle(self, uid: str, handle: str) -> UserProfile:
        """
        Reserve a handle and set it on the user's profile.

        Raises:
            InvalidHandleError: If the handle format is invalid
            HandleTakenError: If another user holds the handle
            HandleAlreadySetError: If the user already has a handle
            ProfileNotFoundError: If the user has no profile
        """
        ...

    async def is_handle_owner(self, uid: Optional[str], handle: str) -> bool:
        """Check whether a user owns a handle."""
        ...

    async def require_owner(self, uid: str, handle: str) -> UserProfile:
        """
        Ownership gate for profile-scoped writes.

        Returns:
            The owner's profile

        Raises:
            ProfileNotFoundError: If no profile has this handle
            ProfileAccessDeniedError: If the user does not own the handle
        """
        ...

    async def update_profile(self, uid: str, update: ProfileUpdate) -> UserProfile:
        """Apply a partial profile update."""
        ...

    async def upload_photo(self, uid: str, file: UploadedFile) -> UserProfile:
        """Upload a profile picture and store its URL on the profile."""
        ...

    async def search_users(self, term: str) -> list[UserProfile]:
        """Case-insensitive substring search over full name and handle."""
        ...

    async def get_users_by_ids(self, uids: list[str]) -> list[UserProfile]:
        """Fetch several profiles, skipping missing IDs."""
        ...
