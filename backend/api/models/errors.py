"""
Error body returned by every failed Willerspace request.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Body of a 4xx/5xx response raised from a WillerspaceError.

    The frontend shows `detail` in its error toast and branches on `code`
    (e.g. HANDLE_TAKEN, CONTENT_NOT_FOUND).
    """

    error: str = Field(..., description="HTTP status phrase, e.g. 'Not Found'")
    detail: Optional[str] = Field(None, description="Message for the user")
    code: Optional[str] = Field(None, description="Stable error code")
