"""
Content module data models.

Content is a tagged union on `type`:
- read: written posts (body text, category, read time)
- listen: audio posts (uploaded or recorded in the browser)
- watch: video posts with a thumbnail
"""

import math
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter


class ContentType(str, Enum):
    """Kind of content."""

    READ = "read"
    LISTEN = "listen"
    WATCH = "watch"


class ContentTab(str, Enum):
    """Feed tabs on a profile page."""

    ALL = "all"
    TEXT = "text"
    AUDIO = "audio"
    VIDEO = "video"

    @property
    def content_type(self) -> Optional[ContentType]:
        """Content type shown by this tab, or None for all types."""
        return _TAB_TYPES[self]


_TAB_TYPES = {
    ContentTab.ALL: None,
    ContentTab.TEXT: ContentType.READ,
    ContentTab.AUDIO: ContentType.LISTEN,
    ContentTab.VIDEO: ContentType.WATCH,
}


# Posts shorter than this many minutes are flagged as short-form
SHORT_FORM_MINUTES = 5
WORDS_PER_MINUTE = 200


def estimate_read_time(body: str) -> int:
    """Estimate reading time in whole minutes (at least 1)."""
    words = len(body.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def is_short_form(read_time: int) -> bool:
    return read_time < SHORT_FORM_MINUTES


class ContentBase(BaseModel):
    """Fields common to every kind of content."""

    id: str = Field(..., description="Content ID (UUID)")
    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(..., description="Title")
    description: str = Field(default="", description="Short description")
    published: bool = Field(default=True, description="Visible to visitors")
    published_at: Optional[datetime] = Field(None, description="First publication time")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class ReadContent(ContentBase):
    """Written post."""

    type: Literal["read"] = "read"
    body: str = Field(..., description="Post text")
    category: str = Field(default="", description="Category label")
    read_time: int = Field(default=1, ge=1, description="Read time in minutes")
    short_form: bool = Field(default=True, description="Read time under 5 minutes")


class ListenContent(ContentBase):
    """Audio post."""

    type: Literal["listen"] = "listen"
    audio_url: str = Field(..., description="Public audio URL")
    duration: float = Field(default=0, ge=0, description="Duration in seconds")
    podcast_name: Optional[str] = Field(None, description="Podcast the episode belongs to")
    audio_path: Optional[str] = Field(None, exclude=True)


class WatchContent(ContentBase):
    """Video post."""

    type: Literal["watch"] = "watch"
    video_url: str = Field(..., description="Public video URL")
    thumbnail_url: str = Field(..., description="Public thumbnail URL")
    duration: float = Field(default=0, ge=0, description="Duration in seconds")
    video_path: Optional[str] = Field(None, exclude=True)
    thumbnail_path: Optional[str] = Field(None, exclude=True)


Content = Annotated[
    Union[ReadContent, ListenContent, WatchContent],
    Field(discriminator="type"),
]

content_adapter: TypeAdapter[Content] = TypeAdapter(Content)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateReadRequest(BaseModel):
    """Request to create a written post."""

    title: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=2000)
    body: str = Field(default="", max_length=100_000)
    category: str = Field(default="", max_length=100)
    read_time: Optional[int] = Field(
        None,
        ge=1,
        le=600,
        description="Read time in minutes; estimated from the body when omitted",
    )
    published: bool = True


class CreateListenRequest(BaseModel):
    """Metadata for an audio post (the file travels separately)."""

    title: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=2000)
    duration: float = Field(default=0, ge=0)
    podcast_name: Optional[str] = Field(None, max_length=200)
    published: bool = True


class CreateWatchRequest(BaseModel):
    """Metadata for a video post (files travel separately)."""

    title: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=2000)
    duration: float = Field(default=0, ge=0)
    published: bool = True


class ContentUpdate(BaseModel):
    """
    Partial update of a post.

    Kind-specific fields are only accepted for content of that kind.
    """

    title: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, max_length=2000)
    published: Optional[bool] = None

    # read
    body: Optional[str] = Field(None, max_length=100_000)
    category: Optional[str] = Field(None, max_length=100)
    read_time: Optional[int] = Field(None, ge=1, le=600)

    # listen
    podcast_name: Optional[str] = Field(None, max_length=200)


KIND_SPECIFIC_FIELDS: dict[str, ContentType] = {
    "body": ContentType.READ,
    "category": ContentType.READ,
    "read_time": ContentType.READ,
    "podcast_name": ContentType.LISTEN,
}


class ContentListResponse(BaseModel):
    """List of posts."""

    items: list[Content] = Field(..., description="Posts, newest first")
    total: int = Field(..., description="Number of items")
