"""
Authentication module.

Handles JWT validation, email/password sign-up and sign-in, and the
admin check.

Public API:
- IAuthService: Interface for auth operations
- JWTPayload, AuthSession, SignUpResult, SignInResult: Auth models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    SignUpRequest,
    SignInRequest,
    AuthSession,
    SignUpResult,
    SignInResult,
    MeResponse,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
    InvalidCredentialsError,
    SignUpError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    "SignUpRequest",
    "SignInRequest",
    "AuthSession",
    "SignUpResult",
    "SignInResult",
    "MeResponse",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthNotConfiguredError",
    "InvalidCredentialsError",
    "SignUpError",
]
