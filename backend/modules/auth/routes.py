"""
Authentication endpoints.

Sign-in stores the access token in an httpOnly session cookie so that
browser requests authenticate without an Authorization header.
"""

from fastapi import APIRouter, Depends, Response

from api.middleware.auth import get_current_user
from api.dependencies import get_auth_service, get_profile_service
from shared.config import get_settings
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import UserProfile

from .interfaces import IAuthService
from .models import (
    SignUpRequest,
    SignInRequest,
    SignUpResult,
    SignInResult,
    MeResponse,
    AuthSession,
)

router = APIRouter()


def _set_session_cookie(response: Response, session: AuthSession) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.access_token,
        max_age=min(settings.session_max_age, session.expires_in),
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        path="/",
    )


@router.post("/signup", response_model=SignUpResult, status_code=201)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> SignUpResult:
    """
    Register with email and password.

    The new profile has no handle; the client should send the user to
    handle setup next.
    """
    result = await service.sign_up(
        email=request.email,
        password=request.password,
        first_name=request.first_name.strip(),
        last_name=request.last_name.strip(),
    )
    if result.session is not None:
        _set_session_cookie(response, result.session)
    return result


@router.post("/signin", response_model=SignInResult)
async def sign_in(
    request: SignInRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> SignInResult:
    """Sign in with email and password and start a cookie session."""
    result = await service.sign_in(request.email, request.password)
    _set_session_cookie(response, result.session)
    return result


@router.post("/signout", status_code=204)
async def sign_out(response: Response) -> Response:
    """End the cookie session."""
    response.delete_cookie(get_settings().session_cookie_name, path="/")
    response.status_code = 204
    return response


@router.get("/me", response_model=MeResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
    profiles: IProfileService = Depends(get_profile_service),
) -> MeResponse:
    """
    Get the current user and their profile.

    Requires authentication.
    """
    profile = await profiles.get_profile(user.id)
    return MeResponse(
        user=user,
        profile=profile,
        is_admin=auth.is_admin(user),
        needs_profile=profile is None,
        needs_handle=profile is not None and not profile.has_handle,
    )


@router.post("/profile", response_model=UserProfile)
async def ensure_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    Get or create the current user's profile.

    The client calls this after an OAuth (Google) sign-in, then sends the
    user to handle setup when the profile has no handle.
    """
    return await auth.ensure_profile(user)
