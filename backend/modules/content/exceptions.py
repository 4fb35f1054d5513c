"""
Content module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    AuthorizationError,
)


class ContentNotFoundError(NotFoundError):
    """Raised when a post is not found (or is not of the expected kind)."""

    def __init__(self, content_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"Content not found: {content_id}",
            code="CONTENT_NOT_FOUND",
            details={"content_id": content_id},
        )


class ContentAccessDeniedError(AuthorizationError):
    """Raised when a user tries to modify a post they don't own."""

    def __init__(self, content_id: str, user_id: str):
        super().__init__(
            "You do not have permission to edit this content.",
            code="CONTENT_ACCESS_DENIED",
            details={"content_id": content_id, "user_id": user_id},
        )


class ContentValidationError(ValidationError):
    """Raised when a required field is missing or a field does not apply."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            code="CONTENT_INVALID",
            details={"field": field} if field else {},
        )


class MissingMediaError(ValidationError):
    """Raised when an audio/video post is submitted without its file."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message,
            code="MISSING_MEDIA",
            details={"field": field},
        )
