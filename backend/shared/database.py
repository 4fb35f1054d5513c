"""
Database client factory for Supabase.

Provides a cached service-role client (for backend operations bypassing RLS)
and throwaway anon clients for password sign-in/sign-up, so that a user
session never gets attached to the shared service client.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for table and storage access. Ownership is enforced by the
    service layer, not by RLS.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set WILLERSPACE_SUPABASE_URL and WILLERSPACE_SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Create a fresh Supabase client with the anon key.

    Signing in stores the session on the client it was called on, so
    every sign-in/sign-up gets its own client.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set WILLERSPACE_SUPABASE_URL and WILLERSPACE_SUPABASE_ANON_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
