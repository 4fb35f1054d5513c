"""
Content service implementation.

Every write is scoped to a profile: the ownership gate runs first, then
the required-field checks, then any uploads, and only then the database
insert. Uploaded blobs are removed again if the insert fails.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Any

from shared.exceptions import WillerspaceError
from shared.storage import BlobStorage, UploadedFile
from modules.profiles.interfaces import IProfileService
from modules.profiles.exceptions import ProfileNotFoundError

from .interfaces import IContentService
from .models import (
    Content,
    ContentType,
    ContentTab,
    ContentUpdate,
    CreateReadRequest,
    CreateListenRequest,
    CreateWatchRequest,
    KIND_SPECIFIC_FIELDS,
    estimate_read_time,
    is_short_form,
)
from .repository import ContentRepository
from .exceptions import (
    ContentNotFoundError,
    ContentAccessDeniedError,
    ContentValidationError,
    MissingMediaError,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."

AUDIO_FOLDER = "audio"
VIDEO_FOLDER = "video"
THUMBNAIL_FOLDER = "thumbnails"

_TYPE_LABELS = {
    ContentType.READ: "Text",
    ContentType.LISTEN: "Audio",
    ContentType.WATCH: "Video",
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContentService(IContentService):
    """Content service backed by Supabase tables and storage."""

    def __init__(
        self,
        repository: ContentRepository,
        storage: BlobStorage,
        profiles: IProfileService,
    ):
        self._repo = repository
        self._storage = storage
        self._profiles = profiles

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def create_read(
        self,
        user_id: str,
        handle: str,
        request: CreateReadRequest,
    ) -> Content:
        await self._profiles.require_owner(user_id, handle)

        title = request.title.strip()
        if not title or not request.body.strip():
            raise ContentValidationError(
                REQUIRED_FIELDS_MESSAGE,
                field="title" if not title else "body",
            )

        read_time = request.read_time or estimate_read_time(request.body)
        data = {
            **self._common_fields(user_id, title, request.description, request.published),
            "type": ContentType.READ.value,
            "body": request.body,
            "category": request.category.strip(),
            "read_time": read_time,
            "short_form": is_short_form(read_time),
        }

        content = self._repo.create(data)
        logger.info("User %s created read post %s", user_id, content.id)
        return content

    async def create_listen(
        self,
        user_id: str,
        handle: str,
        request: CreateListenRequest,
        audio: Optional[UploadedFile],
    ) -> Content:
        await self._profiles.require_owner(user_id, handle)

        title = request.title.strip()
        if not title:
            raise ContentValidationError(REQUIRED_FIELDS_MESSAGE, field="title")
        if audio is None:
            raise MissingMediaError("Please upload or record an audio file.", field="audio")

        blob = self._storage.upload(AUDIO_FOLDER, user_id, audio)

        data = {
            **self._common_fields(user_id, title, request.description, request.published),
            "type": ContentType.LISTEN.value,
            "audio_url": blob.public_url,
            "audio_path": blob.path,
            "duration": request.duration,
            "podcast_name": (request.podcast_name or "").strip() or None,
        }

        content = self._create_or_cleanup(data, [blob.path])
        logger.info("User %s created listen post %s", user_id, content.id)
        return content

    async def create_watch(
        self,
        user_id: str,
        handle: str,
        request: CreateWatchRequest,
        video: Optional[UploadedFile],
        thumbnail: Optional[UploadedFile],
    ) -> Content:
        await self._profiles.require_owner(user_id, handle)

        title = request.title.strip()
        if not title:
            raise ContentValidationError(REQUIRED_FIELDS_MESSAGE, field="title")
        if video is None:
            raise MissingMediaError("Please upload or record a video.", field="video")
        if thumbnail is None:
            raise MissingMediaError("Please upload or capture a thumbnail.", field="thumbnail")

        video_blob = self._storage.upload(VIDEO_FOLDER, user_id, video)
        try:
            thumbnail_blob = self._storage.upload(THUMBNAIL_FOLDER, user_id, thumbnail)
        except Exception:
            self._remove_quietly([video_blob.path])
            raise

        data = {
            **self._common_fields(user_id, title, request.description, request.published),
            "type": ContentType.WATCH.value,
            "video_url": video_blob.public_url,
            "video_path": video_blob.path,
            "thumbnail_url": thumbnail_blob.public_url,
            "thumbnail_path": thumbnail_blob.path,
            "duration": request.duration,
        }

        content = self._create_or_cleanup(data, [video_blob.path, thumbnail_blob.path])
        logger.info("User %s created watch post %s", user_id, content.id)
        return content

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_content(
        self,
        content_id: str,
        viewer_id: Optional[str] = None,
        expected_type: Optional[ContentType] = None,
    ) -> Content:
        content = self._repo.get_by_id(content_id)
        if content is None or (not content.published and content.user_id != viewer_id):
            raise ContentNotFoundError(content_id)

        if expected_type is not None and content.type != expected_type.value:
            raise ContentNotFoundError(
                content_id,
                f"{_TYPE_LABELS[expected_type]} content not found or invalid.",
            )
        return content

    async def list_user_content(
        self,
        handle: str,
        tab: ContentTab = ContentTab.ALL,
        viewer_id: Optional[str] = None,
    ) -> list[Content]:
        profile = await self._profiles.get_profile_by_handle(handle)
        if profile is None:
            raise ProfileNotFoundError(handle)

        logger.debug("Listing %s content for @%s", tab.value, handle)
        return self._repo.list_by_user(
            profile.uid,
            content_type=tab.content_type,
            include_unpublished=viewer_id == profile.uid,
        )

    async def list_latest(
        self,
        content_type: Optional[ContentType] = None,
        limit: Optional[int] = 5,
    ) -> list[Content]:
        return self._repo.list_published(content_type, limit)

    async def list_all(self, content_type: Optional[ContentType] = None) -> list[Content]:
        return self._repo.list_published(content_type, limit=None)

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    async def update_content(
        self,
        user_id: str,
        content_id: str,
        update: ContentUpdate,
    ) -> Content:
        content = self._get_owned(user_id, content_id)

        changes = {
            key: value
            for key, value in update.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not changes:
            return content

        for field in changes:
            kind = KIND_SPECIFIC_FIELDS.get(field)
            if kind is not None and content.type != kind.value:
                raise ContentValidationError(
                    f"'{field}' does not apply to {content.type} content",
                    field=field,
                )

        if "title" in changes:
            changes["title"] = changes["title"].strip()
            if not changes["title"]:
                raise ContentValidationError("Title is required.", field="title")
        if "body" in changes and not changes["body"].strip():
            raise ContentValidationError("Body is required.", field="body")
        if "read_time" in changes:
            changes["short_form"] = is_short_form(changes["read_time"])
        if changes.get("published") and content.published_at is None:
            changes["published_at"] = _now_iso()

        updated = self._repo.update(content_id, changes)
        if updated is None:
            raise ContentNotFoundError(content_id)
        return updated

    async def delete_content(self, user_id: str, content_id: str) -> None:
        content = self._get_owned(user_id, content_id)

        paths: list[str] = []
        if content.type == ContentType.LISTEN.value:
            paths = [content.audio_path]
        elif content.type == ContentType.WATCH.value:
            paths = [content.video_path, content.thumbnail_path]

        self._storage.remove([p for p in paths if p])
        self._repo.delete(content_id)
        logger.info("User %s deleted %s post %s", user_id, content.type, content_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_owned(self, user_id: str, content_id: str) -> Content:
        content = self._repo.get_by_id(content_id)
        if content is None:
            raise ContentNotFoundError(content_id)
        if content.user_id != user_id:
            logger.warning("User %s denied access to content %s", user_id, content_id)
            raise ContentAccessDeniedError(content_id, user_id)
        return content

    def _create_or_cleanup(self, data: dict[str, Any], blob_paths: list[str]) -> Content:
        """Insert a row; on failure remove the blobs uploaded for it."""
        try:
            return self._repo.create(data)
        except Exception:
            logger.error("Insert failed, removing %d uploaded blob(s)", len(blob_paths))
            self._remove_quietly(blob_paths)
            raise

    def _remove_quietly(self, paths: list[str]) -> None:
        """Remove orphaned blobs while another error is propagating."""
        try:
            self._storage.remove(paths)
        except WillerspaceError as e:
            logger.error("Could not remove orphaned blobs %s: %s", paths, e.message)

    @staticmethod
    def _common_fields(
        user_id: str,
        title: str,
        description: str,
        published: bool,
    ) -> dict[str, Any]:
        return {
            "user_id": user_id,
            "title": title,
            "description": description.strip(),
            "published": published,
            "published_at": _now_iso() if published else None,
        }
