"""
Profiles module.

Handles user profiles, the public handle registry and profile ownership.

Public API:
- IProfileService: Interface for profile operations
- UserProfile / PublicProfile: Profile representations
- Profile exceptions: ProfileNotFoundError, HandleTakenError, etc.
"""

from .interfaces import IProfileService
from .models import (
    UserProfile,
    PublicProfile,
    ProfileUpdate,
    HandleReservation,
    ClaimHandleRequest,
    HandleAvailability,
    normalize_handle,
    is_valid_handle,
)
from .exceptions import (
    ProfileNotFoundError,
    ProfileAccessDeniedError,
    InvalidHandleError,
    HandleTakenError,
    HandleAlreadySetError,
    MissingPhotoError,
)

__all__ = [
    # Interface
    "IProfileService",
    # Models
    "UserProfile",
    "PublicProfile",
    "ProfileUpdate",
    "HandleReservation",
    "ClaimHandleRequest",
    "HandleAvailability",
    "normalize_handle",
    "is_valid_handle",
    # Exceptions
    "ProfileNotFoundError",
    "ProfileAccessDeniedError",
    "InvalidHandleError",
    "HandleTakenError",
    "HandleAlreadySetError",
    "MissingPhotoError",
]
