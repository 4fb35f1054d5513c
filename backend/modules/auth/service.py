"""
Authentication service implementation.

Validates Supabase JWT tokens and performs email/password sign-up and
sign-in against Supabase Auth.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.database import get_supabase_anon_client
from shared.exceptions import ConflictError
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import UserProfile

from .interfaces import IAuthService
from .models import JWTPayload, AuthSession, SignInResult, SignUpResult
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
    InvalidCredentialsError,
    SignUpError,
)

logger = logging.getLogger(__name__)


def display_name_from_metadata(metadata: dict) -> Optional[str]:
    """
    Pick a display name out of Supabase user_metadata.

    Password sign-ups store first_name/last_name; OAuth providers such as
    Google fill in full_name or name.
    """
    first = (metadata.get("first_name") or "").strip()
    last = (metadata.get("last_name") or "").strip()
    if first or last:
        return f"{first} {last}".strip()

    for key in ("full_name", "name", "display_name"):
        value = (metadata.get(key) or "").strip()
        if value:
            return value
    return None


def split_display_name(display_name: Optional[str]) -> tuple[str, str]:
    """Split "Ada King Lovelace" into ("Ada", "King Lovelace")."""
    parts = (display_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the profiles module
    for the profile row created at registration.
    """

    def __init__(self, profiles: Optional[IProfileService] = None):
        self._settings = get_settings()
        self._profiles = profiles

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        jwt_payload = JWTPayload(**payload)
        metadata = jwt_payload.user_metadata

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or "",
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            role=jwt_payload.role if jwt_payload.role != "authenticated" else "user",
            display_name=display_name_from_metadata(metadata),
            avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> SignUpResult:
        profiles = self._require_profiles()

        client = get_supabase_anon_client()
        try:
            response = client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {
                    "data": {
                        "first_name": first_name,
                        "last_name": last_name,
                        "display_name": f"{first_name} {last_name}".strip(),
                    }
                },
            })
        except Exception as e:
            logger.warning("Sign-up rejected for %s: %s", email, e)
            raise SignUpError(str(e) or "Failed to create account. Please try again.", email) from e

        if response.user is None:
            raise SignUpError("Failed to create account. Please try again.", email)

        profile = await profiles.create_profile(
            uid=str(response.user.id),
            email=email,
            first_name=first_name,
            last_name=last_name,
        )
        logger.info("Registered user %s", profile.uid)

        return SignUpResult(
            profile=profile,
            session=self._map_session(response.session),
        )

    async def sign_in(self, email: str, password: str) -> SignInResult:
        client = get_supabase_anon_client()
        try:
            response = client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.info("Sign-in failed for %s: %s", email, e)
            raise InvalidCredentialsError() from e

        session = self._map_session(response.session)
        if session is None or response.user is None:
            raise InvalidCredentialsError()

        return SignInResult(
            user_id=str(response.user.id),
            email=response.user.email or email,
            session=session,
        )

    async def ensure_profile(self, user: AuthenticatedUser) -> UserProfile:
        """
        Return the user's profile, creating it on first use.

        Users who arrive through an OAuth provider (Google) never go through
        sign_up, so their profile is built from the token: the provider's
        display name split into first and last name, its picture as the
        photo, and no handle.
        """
        profiles = self._require_profiles()

        profile = await profiles.get_profile(user.id)
        if profile is not None:
            return profile

        first_name, last_name = split_display_name(user.display_name)
        try:
            profile = await profiles.create_profile(
                uid=user.id,
                email=user.email,
                first_name=first_name,
                last_name=last_name,
                photo_url=user.avatar_url,
            )
        except ConflictError:
            # Created by a concurrent request.
            profile = await profiles.get_profile(user.id)
            if profile is None:
                raise
            return profile

        logger.info("Created profile for OAuth user %s", user.id)
        return profile

    def is_admin(self, user: AuthenticatedUser) -> bool:
        admin_email = self._settings.admin_email.strip().lower()
        return bool(admin_email) and user.email.lower() == admin_email

    def _require_profiles(self) -> IProfileService:
        if self._profiles is None:
            raise RuntimeError("AuthService was created without a profile service")
        return self._profiles

    @staticmethod
    def _map_session(session) -> Optional[AuthSession]:
        """Map a Supabase session object to AuthSession."""
        if session is None:
            return None
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in or 3600,
            token_type=session.token_type or "bearer",
        )
