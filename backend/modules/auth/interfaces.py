"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.profiles.models import UserProfile

from .models import SignInResult, SignUpResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> SignUpResult:
        """
        Register a new user and create their profile (without a handle).

        Raises:
            SignUpError: If Supabase Auth rejects the registration
        """
        ...

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
        """
        ...

    async def ensure_profile(self, user: AuthenticatedUser) -> UserProfile:
        """
        Return the user's profile, creating it from the token if missing.

        OAuth sign-ins (Google) have no sign-up step; this is where their
        profile row is first written.
        """
        ...

    def is_admin(self, user: AuthenticatedUser) -> bool:
        """Check whether the user is the configured site admin."""
        ...
