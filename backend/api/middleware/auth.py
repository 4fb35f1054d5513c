"""
Authentication dependencies.

Resolves the current user from a Supabase access token, taken from the
Authorization header or, failing that, from the session cookie set at
sign-in. Token validation itself lives in the auth module.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Return the bearer token if present, else the session cookie value."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name) or None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = extract_token(request, credentials)
    if token is None:
        raise AuthError("Missing authorization header")

    try:
        return await auth.validate_token(token)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication,
    e.g. a profile feed that shows drafts to its owner.
    """
    token = extract_token(request, credentials)
    if token is None:
        return None

    try:
        return await auth.validate_token(token)
    except AuthenticationError:
        return None


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """Dependency that requires the configured site admin."""
    if not auth.is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(require_admin)
