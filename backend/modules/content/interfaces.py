"""
Content module interface.

The API layer depends on IContentService for all post operations.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.storage import UploadedFile

from .models import (
    Content,
    ContentType,
    ContentTab,
    ContentUpdate,
    CreateReadRequest,
    CreateListenRequest,
    CreateWatchRequest,
)


@runtime_checkable
class IContentService(Protocol):
    """Interface for content operations."""

    async def create_read(
        self,
        user_id: str,
        handle: str,
        request: CreateReadRequest,
    ) -> Content:
        """
        Create a written post on the profile behind `handle`.

        Raises:
            ProfileAccessDeniedError: If the user does not own the handle
            ContentValidationError: If title or body is missing
        """
        ...

    async def create_listen(
        self,
        user_id: str,
        handle: str,
        request: CreateListenRequest,
        audio: Optional[UploadedFile],
    ) -> Content:
        """
        Upload the audio file, then create an audio post.

        Raises:
            ProfileAccessDeniedError: If the user does not own the handle
            ContentValidationError: If the title is missing
            MissingMediaError: If no audio file was sent
        """
        ...

    async def create_watch(
        self,
        user_id: str,
        handle: str,
        request: CreateWatchRequest,
        video: Optional[UploadedFile],
        thumbnail: Optional[UploadedFile],
    ) -> Content:
        """
        Upload the video and thumbnail, then create a video post.

        Raises:
            ProfileAccessDeniedError: If the user does not own the handle
            ContentValidationError: If the title is missing
            MissingMediaError: If the video or thumbnail is missing
        """
        ...

    async def get_content(
        self,
        content_id: str,
        viewer_id: Optional[str] = None,
        expected_type: Optional[ContentType] = None,
    ) -> Content:
        """
        Get a post. Unpublished posts are only visible to their owner.

        Raises:
            ContentNotFoundError: If missing, hidden, or not of expected_type
        """
        ...

    async def list_user_content(
        self,
        handle: str,
        tab: ContentTab = ContentTab.ALL,
        viewer_id: Optional[str] = None,
    ) -> list[Content]:
        """
        List a profile's posts, newest first.

        Drafts are included only when the viewer owns the handle.

        Raises:
            ProfileNotFoundError: If no profile has this handle
        """
        ...

    async def list_latest(
        self,
        content_type: Optional[ContentType] = None,
        limit: Optional[int] = 5,
    ) -> list[Content]:
        """Latest published posts across all users (all of them when limit is None)."""
        ...

    async def update_content(
        self,
        user_id: str,
        content_id: str,
        update: ContentUpdate,
    ) -> Content:
        """
        Edit a post owned by the user.

        Raises:
            ContentNotFoundError: If the post doesn't exist
            ContentAccessDeniedError: If the user doesn't own it
            ContentValidationError: If the update is invalid
        """
        ...

    async def delete_content(self, user_id: str, content_id: str) -> None:
        """
        Delete a post and its uploaded files.

        Raises:
            ContentNotFoundError: If the post doesn't exist
            ContentAccessDeniedError: If the user doesn't own it
        """
        ...

    async def list_all(self, content_type: Optional[ContentType] = None) -> list[Content]:
        """Every published post across all users, most recently published first."""
        ...
