"""
Shared infrastructure for the Willerspace backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base repository with PostgREST error mapping
- storage: Blob uploads to a Supabase Storage bucket

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_supabase_anon_client, reset_client_cache
from .exceptions import (
    WillerspaceError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser
from .storage import BlobStorage, StoredBlob, UploadedFile

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_anon_client",
    "reset_client_cache",
    "WillerspaceError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "BlobStorage",
    "StoredBlob",
    "UploadedFile",
]
