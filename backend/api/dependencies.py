"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories and blob storage share the cached service-role Supabase
client; services receive them (and each other) through their constructors.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.profiles.interfaces import IProfileService
    from modules.profiles.repository import ProfileRepository
    from modules.content.interfaces import IContentService
    from modules.content.repository import ContentRepository
    from modules.subscribers.interfaces import ISubscriberService
    from modules.subscribers.repository import SubscriberRepository
    from shared.storage import BlobStorage


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_service: "IProfileService | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._content_service: "IContentService | None" = None
        self._content_repository: "ContentRepository | None" = None
        self._subscriber_service: "ISubscriberService | None" = None
        self._subscriber_repository: "SubscriberRepository | None" = None
        self._storage: "BlobStorage | None" = None

    @property
    def storage(self) -> "BlobStorage":
        """Get the blob storage for the configured bucket."""
        if self._storage is None:
            from shared.config import get_settings
            from shared.database import get_supabase_client
            from shared.storage import BlobStorage
            settings = get_settings()
            self._storage = BlobStorage(
                get_supabase_client(),
                bucket=settings.storage_bucket,
                max_upload_bytes=settings.max_upload_bytes,
            )
        return self._storage

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(
                repository=self.profile_repository,
                storage=self.storage,
            )
        return self._profile_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(profiles=self.profiles)
        return self._auth_service

    @property
    def content_repository(self) -> "ContentRepository":
        """Get the content repository instance."""
        if self._content_repository is None:
            from modules.content.repository import ContentRepository
            from shared.database import get_supabase_client
            self._content_repository = ContentRepository(get_supabase_client())
        return self._content_repository

    @property
    def content(self) -> "IContentService":
        """Get the content service instance."""
        if self._content_service is None:
            from modules.content.service import ContentService
            self._content_service = ContentService(
                repository=self.content_repository,
                storage=self.storage,
                profiles=self.profiles,
            )
        return self._content_service

    @property
    def subscriber_repository(self) -> "SubscriberRepository":
        """Get the subscriber repository instance."""
        if self._subscriber_repository is None:
            from modules.subscribers.repository import SubscriberRepository
            from shared.database import get_supabase_client
            self._subscriber_repository = SubscriberRepository(get_supabase_client())
        return self._subscriber_repository

    @property
    def subscribers(self) -> "ISubscriberService":
        """Get the subscriber service instance."""
        if self._subscriber_service is None:
            from modules.subscribers.service import SubscriberService
            self._subscriber_service = SubscriberService(self.subscriber_repository)
        return self._subscriber_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_service = None
        self._profile_repository = None
        self._content_service = None
        self._content_repository = None
        self._subscriber_service = None
        self._subscriber_repository = None
        self._storage = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_content_service() -> "IContentService":
    """FastAPI dependency for content service."""
    return get_container().content


def get_subscriber_service() -> "ISubscriberService":
    """FastAPI dependency for subscriber service."""
    return get_container().subscribers
