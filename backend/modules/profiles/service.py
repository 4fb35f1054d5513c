"""
Profiles service implementation.

Owns the profile rows, the handle registry and the ownership gate that
every profile-scoped write goes through.
"""

import logging
from typing import Optional

from shared.storage import BlobStorage, UploadedFile

from .interfaces import IProfileService
from .models import UserProfile, ProfileUpdate, normalize_handle, is_valid_handle
from .repository import ProfileRepository
from .exceptions import (
    ProfileNotFoundError,
    ProfileAccessDeniedError,
    InvalidHandleError,
    HandleTakenError,
    HandleAlreadySetError,
)

logger = logging.getLogger(__name__)

PROFILE_PICTURES_FOLDER = "profile_pictures"


class ProfileService(IProfileService):
    """Profile service backed by Supabase tables and storage."""

    def __init__(
        self,
        repository: ProfileRepository,
        storage: Optional[BlobStorage] = None,
    ):
        self._repo = repository
        self._storage = storage

    async def create_profile(
        self,
        uid: str,
        email: str,
        first_name: str,
        last_name: str,
        photo_url: Optional[str] = None,
    ) -> UserProfile:
        profile = self._repo.create({
            "uid": uid,
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "handle": None,
            "photo_url": photo_url,
            "bio": None,
        })
        logger.info("Created profile for user %s", uid)
        return profile

    async def get_profile(self, uid: str) -> Optional[UserProfile]:
        return self._repo.get_by_uid(uid)

    async def get_profile_by_handle(self, handle: str) -> Optional[UserProfile]:
        uid = self._repo.get_handle_owner(normalize_handle(handle))
        if uid is None:
            return None
        return self._repo.get_by_uid(uid)

    async def check_handle_available(self, handle: str) -> bool:
        handle = self._validated_handle(handle)
        return self._repo.get_handle_owner(handle) is None

    async def claim_handle(self, uid: str, handle: str) -> UserProfile:
        """
        Reserve a handle, then write it to the profile.

        The registry row is inserted first so that a concurrent claim of
        the same handle fails on the primary key. If the profile update
        fails afterwards, the reservation is released again.
        """
        handle = self._validated_handle(handle)

        profile = self._repo.get_by_uid(uid)
        if profile is None:
            raise ProfileNotFoundError(uid)
        if profile.handle:
            raise HandleAlreadySetError(profile.handle)

        if self._repo.get_handle_owner(handle) is not None:
            raise HandleTakenError(handle)

        self._repo.reserve_handle(handle, uid)
        try:
            updated = self._repo.update(uid, {"handle": handle})
        except Exception:
            self._repo.release_handle(handle, uid)
            raise
        if updated is None:
            self._repo.release_handle(handle, uid)
            raise ProfileNotFoundError(uid)

        logger.info("User %s claimed handle @%s", uid, handle)
        return updated

    async def is_handle_owner(self, uid: Optional[str], handle: str) -> bool:
        if not uid:
            return False
        return self._repo.get_handle_owner(normalize_handle(handle)) == uid

    async def require_owner(self, uid: str, handle: str) -> UserProfile:
        handle = normalize_handle(handle)
        owner_uid = self._repo.get_handle_owner(handle)
        if owner_uid is None:
            raise ProfileNotFoundError(handle)
        if owner_uid != uid:
            logger.warning("User %s denied access to @%s", uid, handle)
            raise ProfileAccessDeniedError(handle, uid)

        profile = self._repo.get_by_uid(uid)
        if profile is None:
            raise ProfileNotFoundError(handle)
        return profile

    async def update_profile(self, uid: str, update: ProfileUpdate) -> UserProfile:
        data = update.model_dump(exclude_unset=True)
        if not data:
            profile = self._repo.get_by_uid(uid)
        else:
            profile = self._repo.update(uid, data)
        if profile is None:
            raise ProfileNotFoundError(uid)
        return profile

    async def upload_photo(self, uid: str, file: UploadedFile) -> UserProfile:
        if self._storage is None:
            raise RuntimeError("ProfileService was created without blob storage")

        blob = self._storage.upload(PROFILE_PICTURES_FOLDER, uid, file)
        profile = self._repo.update(uid, {"photo_url": blob.public_url})
        if profile is None:
            self._storage.remove([blob.path])
            raise ProfileNotFoundError(uid)
        return profile

    async def search_users(self, term: str) -> list[UserProfile]:
        """
        Search profiles by full name or handle.

        There is no search index: every profile is fetched and filtered
        in memory, preserving the repository order.
        """
        needle = term.strip().lower()
        if not needle:
            return []

        return [
            profile
            for profile in self._repo.list_all()
            if needle in profile.full_name.lower()
            or needle in (profile.handle or "").lower()
        ]

    async def get_users_by_ids(self, uids: list[str]) -> list[UserProfile]:
        by_uid = {p.uid: p for p in self._repo.get_many(uids)}
        return [by_uid[uid] for uid in uids if uid in by_uid]

    def _validated_handle(self, handle: str) -> str:
        normalized = normalize_handle(handle)
        if not is_valid_handle(normalized):
            raise InvalidHandleError(handle)
        return normalized
