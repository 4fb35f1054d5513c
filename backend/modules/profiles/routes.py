"""
Profile and handle API endpoints.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from api.middleware.auth import get_current_user
from api.dependencies import get_profile_service
from api.uploads import read_upload
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import ProfileNotFoundError, MissingPhotoError
from .interfaces import IProfileService
from .models import (
    UserProfile,
    PublicProfile,
    ProfileUpdate,
    ClaimHandleRequest,
    HandleAvailability,
    normalize_handle,
)

router = APIRouter()
handles_router = APIRouter()


@router.get("/{handle}", response_model=PublicProfile)
async def get_profile(
    handle: str,
    service: IProfileService = Depends(get_profile_service),
) -> PublicProfile:
    """Get the public profile behind a handle."""
    profile = await service.get_profile_by_handle(handle)
    if profile is None:
        raise ProfileNotFoundError(handle)
    return PublicProfile.from_profile(profile)


@router.patch("/{handle}", response_model=UserProfile)
async def update_profile(
    handle: str,
    update: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """
    Update the profile settings (name, bio, tagline, headline).

    Only the handle owner may do this.
    """
    await service.require_owner(user.id, handle)
    return await service.update_profile(user.id, update)


@router.post("/{handle}/photo", response_model=UserProfile)
async def upload_profile_photo(
    handle: str,
    photo: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Upload a new profile picture."""
    await service.require_owner(user.id, handle)

    file = await read_upload(
        photo,
        default_name="photo.jpg",
        default_type="image/jpeg",
        max_bytes=get_settings().max_upload_bytes,
    )
    if file is None:
        raise MissingPhotoError()
    return await service.upload_photo(user.id, file)


@handles_router.get("/{handle}/availability", response_model=HandleAvailability)
async def check_handle_availability(
    handle: str,
    service: IProfileService = Depends(get_profile_service),
) -> HandleAvailability:
    """Check whether a handle is free. Invalid handles return 422."""
    available = await service.check_handle_available(handle)
    return HandleAvailability(handle=normalize_handle(handle), available=available)


@handles_router.post("", response_model=UserProfile, status_code=201)
async def claim_handle(
    request: ClaimHandleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Claim a handle for the current user."""
    return await service.claim_handle(user.id, request.handle)
