"""
Error hierarchy for the Willerspace backend.

Services raise these; api/app.py turns each base class into an HTTP status
and an ErrorResponse whose detail is the toast text the frontend shows.
Feature modules subclass the bases (HandleTakenError, ContentNotFoundError,
...) to give every failure a stable `code`.
"""

from typing import Optional, Any


class WillerspaceError(Exception):
    """
    Root of every error the API knows how to render.

    Args:
        message: Human-readable text, shown to the user as-is.
        code: Machine-readable identifier; defaults to the class name.
        details: Extra context for logs and clients (ids, fields, limits).
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(WillerspaceError):
    """A profile, handle or post does not exist, or is hidden from the caller. (404)"""

    pass


class ValidationError(WillerspaceError):
    """A required field is missing or malformed. (422)"""

    pass


class ConflictError(WillerspaceError):
    """A unique value (handle, subscriber email, profile row) is already taken. (409)"""

    pass


class AuthenticationError(WillerspaceError):
    """No usable session token. (401)"""

    pass


class AuthorizationError(WillerspaceError):
    """Signed in, but not the owner or the admin. (403)"""

    pass


class ExternalServiceError(WillerspaceError):
    """Supabase (database, storage or auth) failed the request. (502)"""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
