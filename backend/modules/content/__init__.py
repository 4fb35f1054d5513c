"""
Content module.

Handles the three kinds of posts (read, listen, watch), their media
uploads and the profile feeds.

Public API:
- IContentService: Interface for content operations
- Content: Tagged union of ReadContent, ListenContent and WatchContent
- Content exceptions: ContentNotFoundError, MissingMediaError, etc.
"""

from .interfaces import IContentService
from .models import (
    Content,
    ContentType,
    ContentTab,
    ReadContent,
    ListenContent,
    WatchContent,
    CreateReadRequest,
    CreateListenRequest,
    CreateWatchRequest,
    ContentUpdate,
    ContentListResponse,
    estimate_read_time,
    is_short_form,
)
from .exceptions import (
    ContentNotFoundError,
    ContentAccessDeniedError,
    ContentValidationError,
    MissingMediaError,
)

__all__ = [
    # Interface
    "IContentService",
    # Models
    "Content",
    "ContentType",
    "ContentTab",
    "ReadContent",
    "ListenContent",
    "WatchContent",
    "CreateReadRequest",
    "CreateListenRequest",
    "CreateWatchRequest",
    "ContentUpdate",
    "ContentListResponse",
    "estimate_read_time",
    "is_short_form",
    # Exceptions
    "ContentNotFoundError",
    "ContentAccessDeniedError",
    "ContentValidationError",
    "MissingMediaError",
]
