"""
Content API endpoints.

Profile-scoped endpoints (feed and creation) are mounted under
/api/profiles; post-level endpoints live under /api/content.
Audio and video posts are multipart forms so the browser can send the
recorded blob alongside the metadata.
"""

import time
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from api.middleware.auth import get_current_user, get_optional_user
from api.dependencies import get_content_service, get_profile_service
from api.uploads import read_upload
from shared.config import get_settings
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService

from .interfaces import IContentService
from .models import (
    Content,
    ContentType,
    ContentTab,
    ContentUpdate,
    ContentListResponse,
    CreateReadRequest,
    CreateListenRequest,
    CreateWatchRequest,
)

router = APIRouter()
profile_content_router = APIRouter()


def _now_ms() -> int:
    return int(time.time() * 1000)


@profile_content_router.get("/{handle}/content", response_model=ContentListResponse)
async def list_profile_content(
    handle: str,
    tab: ContentTab = Query(default=ContentTab.ALL, description="Feed tab"),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IContentService = Depends(get_content_service),
) -> ContentListResponse:
    """
    List a profile's posts, newest first.

    The owner also sees their unpublished drafts.
    """
    items = await service.list_user_content(
        handle,
        tab=tab,
        viewer_id=user.id if user else None,
    )
    return ContentListResponse(items=items, total=len(items))


@profile_content_router.post("/{handle}/content/read", response_model=Content, status_code=201)
async def create_read_post(
    handle: str,
    request: CreateReadRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContentService = Depends(get_content_service),
) -> Content:
    """Publish a written post. Read time is estimated when omitted."""
    return await service.create_read(user.id, handle, request)


@profile_content_router.post("/{handle}/content/listen", response_model=Content, status_code=201)
async def create_listen_post(
    handle: str,
    title: str = Form(default="", max_length=300),
    description: str = Form(default="", max_length=2000),
    duration: float = Form(default=0, ge=0),
    podcast_name: Optional[str] = Form(default=None, max_length=200),
    published: bool = Form(default=True),
    audio: Optional[UploadFile] = File(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContentService = Depends(get_content_service),
    profiles: IProfileService = Depends(get_profile_service),
) -> Content:
    """Publish an audio post from an uploaded or recorded file."""
    await profiles.require_owner(user.id, handle)
    max_bytes = get_settings().max_upload_bytes

    request = CreateListenRequest(
        title=title,
        description=description,
        duration=duration,
        podcast_name=podcast_name,
        published=published,
    )
    file = await read_upload(
        audio,
        default_name=f"recording_{_now_ms()}.wav",
        default_type="audio/wav",
        max_bytes=max_bytes,
    )
    return await service.create_listen(user.id, handle, request, file)


@profile_content_router.post("/{handle}/content/watch", response_model=Content, status_code=201)
async def create_watch_post(
    handle: str,
    title: str = Form(default="", max_length=300),
    description: str = Form(default="", max_length=2000),
    duration: float = Form(default=0, ge=0),
    published: bool = Form(default=True),
    video: Optional[UploadFile] = File(default=None),
    thumbnail: Optional[UploadFile] = File(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContentService = Depends(get_content_service),
    profiles: IProfileService = Depends(get_profile_service),
) -> Content:
    """Publish a video post with its thumbnail."""
    await profiles.require_owner(user.id, handle)
    max_bytes = get_settings().max_upload_bytes

    request = CreateWatchRequest(
        title=title,
        description=description,
        duration=duration,
        published=published,
    )
    now_ms = _now_ms()
    video_file = await read_upload(
        video,
        default_name=f"video_{now_ms}.webm",
        default_type="video/webm",
        max_bytes=max_bytes,
    )
    thumbnail_file = await read_upload(
        thumbnail,
        default_name=f"thumb_{now_ms}.jpg",
        default_type="image/jpeg",
        max_bytes=max_bytes,
    )
    return await service.create_watch(user.id, handle, request, video_file, thumbnail_file)


@router.get("/{content_id}", response_model=Content)
async def get_content(
    content_id: str,
    type: Optional[ContentType] = Query(default=None, description="Expected content type"),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IContentService = Depends(get_content_service),
) -> Content:
    """Get a single post. Drafts are only visible to their owner."""
    return await service.get_content(
        content_id,
        viewer_id=user.id if user else None,
        expected_type=type,
    )


@router.patch("/{content_id}", response_model=Content)
async def update_content(
    content_id: str,
    update: ContentUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContentService = Depends(get_content_service),
) -> Content:
    """Edit a post you own."""
    return await service.update_content(user.id, content_id, update)


@router.delete("/{content_id}", status_code=204)
async def delete_content(
    content_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContentService = Depends(get_content_service),
) -> None:
    """Delete a post you own, along with its uploaded media."""
    await service.delete_content(user.id, content_id)
