"""
Subscribers module exceptions.
"""

from shared.exceptions import ValidationError


class InvalidEmailError(ValidationError):
    """Raised when a subscription is attempted with a malformed address."""

    def __init__(self, email: str):
        super().__init__(
            "Please enter a valid email.",
            code="INVALID_EMAIL",
            details={"email": email},
        )
