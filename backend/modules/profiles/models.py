"""
Profiles module data models.

A profile is keyed by the Supabase user id. The public handle is optional
until the user claims one; claimed handles live in a separate registry
table that enforces uniqueness.
"""

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


HANDLE_PATTERN = re.compile(r"^[a-z0-9_]+$")
HANDLE_MIN_LENGTH = 3
HANDLE_MAX_LENGTH = 30


def normalize_handle(value: str) -> str:
    """Lowercase and trim a handle as typed by the user."""
    return value.strip().lower()


def is_valid_handle(value: str) -> bool:
    """Check a normalized handle against the allowed format."""
    return (
        HANDLE_MIN_LENGTH <= len(value) <= HANDLE_MAX_LENGTH
        and HANDLE_PATTERN.match(value) is not None
    )


class UserProfile(BaseModel):
    """Public profile of a user."""

    uid: str = Field(..., description="User ID (UUID from Supabase)")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    email: str = Field(..., description="Email address")
    handle: Optional[str] = Field(None, description="Public handle, if claimed")
    photo_url: Optional[str] = Field(None, description="Profile picture URL")
    bio: Optional[str] = Field(None, description="Short biography")
    tagline: Optional[str] = Field(None, description="Tagline shown under the name")
    headline: Optional[str] = Field(None, description="Headline shown on the feed")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_handle(self) -> bool:
        return self.handle is not None


class PublicProfile(BaseModel):
    """Profile as shown to visitors (no email)."""

    uid: str
    first_name: str
    last_name: str
    handle: Optional[str] = None
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    tagline: Optional[str] = None
    headline: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "PublicProfile":
        return cls(**profile.model_dump(exclude={"email", "created_at", "updated_at"}))


class ProfileUpdate(BaseModel):
    """Partial profile update from the settings form."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    tagline: Optional[str] = Field(None, max_length=200)
    headline: Optional[str] = Field(None, max_length=200)

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> str:
        # Names may be left out of an update but never cleared.
        if value is None or not value.strip():
            raise ValueError("Name cannot be empty")
        return value.strip()


class HandleReservation(BaseModel):
    """Entry in the handle registry."""

    handle: str = Field(..., description="Reserved handle")
    uid: str = Field(..., description="Owning user ID")
    created_at: datetime = Field(..., description="Reservation time")


class ClaimHandleRequest(BaseModel):
    """Request to claim a handle for the current user."""

    handle: str = Field(..., min_length=1, max_length=HANDLE_MAX_LENGTH)


class HandleAvailability(BaseModel):
    """Result of a handle availability check."""

    handle: str
    available: bool
