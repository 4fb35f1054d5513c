"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")

    role: str = Field(default="user", description="User role")

    display_name: Optional[str] = Field(None, description="Name from the identity provider")
    avatar_url: Optional[str] = Field(None, description="Picture from the identity provider")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
