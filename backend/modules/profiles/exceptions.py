"""
Profiles module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthorizationError,
)


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile exists for a handle or user id."""

    def __init__(self, identifier: str):
        super().__init__(
            f"Profile not found: {identifier}",
            code="PROFILE_NOT_FOUND",
            details={"profile": identifier},
        )


class ProfileAccessDeniedError(AuthorizationError):
    """Raised when a user tries to manage a profile they don't own."""

    def __init__(self, handle: str, user_id: str):
        super().__init__(
            "You do not have permission to edit this profile.",
            code="PROFILE_ACCESS_DENIED",
            details={"handle": handle, "user_id": user_id},
        )


class InvalidHandleError(ValidationError):
    """Raised when a handle does not match the allowed format."""

    def __init__(self, handle: str):
        super().__init__(
            "Handles may only contain letters, numbers and underscores (3-30 characters).",
            code="INVALID_HANDLE",
            details={"handle": handle},
        )


class HandleTakenError(ConflictError):
    """Raised when a handle is already reserved."""

    def __init__(self, handle: str):
        super().__init__(
            f"Handle @{handle} is already taken",
            code="HANDLE_TAKEN",
            details={"handle": handle},
        )


class HandleAlreadySetError(ConflictError):
    """Raised when a user who already has a handle tries to claim another."""

    def __init__(self, handle: str):
        super().__init__(
            f"Your handle is already set to @{handle}",
            code="HANDLE_ALREADY_SET",
            details={"handle": handle},
        )


class MissingPhotoError(ValidationError):
    """Raised when a photo upload arrives without a usable file."""

    def __init__(self):
        super().__init__(
            "Please choose a picture to upload.",
            code="MISSING_PHOTO",
            details={"field": "photo"},
        )
