"""
Explore endpoints.

Cross-profile discovery: user search and the published post feeds.
Feeds carry the public profiles of their authors so the client can
render bylines without a request per post.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.dependencies import get_profile_service, get_content_service
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import PublicProfile
from modules.content.interfaces import IContentService
from modules.content.models import Content, ContentType

router = APIRouter()


class UserSearchResponse(BaseModel):
    """Profiles matching a search term."""

    items: list[PublicProfile]
    total: int


class FeedResponse(BaseModel):
    """Published posts with their authors."""

    items: list[Content]
    total: int
    authors: list[PublicProfile]


async def _with_authors(items: list[Content], profiles: IProfileService) -> FeedResponse:
    author_ids = list(dict.fromkeys(item.user_id for item in items))
    authors = await profiles.get_users_by_ids(author_ids)
    return FeedResponse(
        items=items,
        total=len(items),
        authors=[PublicProfile.from_profile(p) for p in authors],
    )


@router.get("/users", response_model=UserSearchResponse)
async def search_users(
    q: str = Query(default="", max_length=100, description="Name or handle fragment"),
    service: IProfileService = Depends(get_profile_service),
) -> UserSearchResponse:
    """Search users by name or handle. A blank term returns nothing."""
    profiles = await service.search_users(q)
    items = [PublicProfile.from_profile(p) for p in profiles]
    return UserSearchResponse(items=items, total=len(items))


@router.get("/latest", response_model=FeedResponse)
async def latest_content(
    type: Optional[ContentType] = Query(default=None, description="Only this kind"),
    limit: int = Query(default=5, ge=1, le=50, description="Maximum number of posts"),
    content: IContentService = Depends(get_content_service),
    profiles: IProfileService = Depends(get_profile_service),
) -> FeedResponse:
    """Latest published posts across all profiles (home page sections)."""
    items = await content.list_latest(content_type=type, limit=limit)
    return await _with_authors(items, profiles)


@router.get("/content", response_model=FeedResponse)
async def all_content(
    type: Optional[ContentType] = Query(default=None, description="Only this kind"),
    content: IContentService = Depends(get_content_service),
    profiles: IProfileService = Depends(get_profile_service),
) -> FeedResponse:
    """Every published post (the Read/Listen/Watch pages)."""
    items = await content.list_all(content_type=type)
    return await _with_authors(items, profiles)
