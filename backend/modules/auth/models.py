"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from shared.models import AuthenticatedUser
from modules.profiles.models import UserProfile


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SignUpRequest(BaseModel):
    """Registration form."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class SignInRequest(BaseModel):
    """Email/password sign-in form."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthSession(BaseModel):
    """Tokens issued by Supabase Auth for a signed-in user."""

    access_token: str
    refresh_token: str
    expires_in: int = Field(default=3600, description="Access token lifetime in seconds")
    token_type: str = "bearer"


class SignUpResult(BaseModel):
    """
    Result of a registration.

    session is None when the Supabase project requires email confirmation
    before the first sign-in.
    """

    profile: UserProfile
    session: Optional[AuthSession] = None


class SignInResult(BaseModel):
    """Result of a password sign-in."""

    user_id: str
    email: str
    session: AuthSession


class MeResponse(BaseModel):
    """Current identity and profile."""

    user: AuthenticatedUser
    profile: Optional[UserProfile] = None
    is_admin: bool = False
    needs_profile: bool = Field(
        default=False,
        description="True when no profile exists yet (first OAuth sign-in)",
    )
    needs_handle: bool = Field(
        default=False,
        description="True when the profile exists but no handle was claimed yet",
    )
