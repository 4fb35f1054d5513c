"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock, patch
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.service import AuthService
from modules.content.models import ReadContent, ListenContent, WatchContent
from modules.profiles.models import UserProfile


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_ADMIN_EMAIL = "admin@example.com"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    user_metadata: dict | None = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        user_metadata: Provider metadata (names, avatar) to embed

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_profile(
    uid: str = "test-user-123",
    handle: str | None = "willer",
    first_name: str = "Willer",
    last_name: str = "Smith",
    email: str = "test@example.com",
) -> UserProfile:
    """Build a UserProfile for tests."""
    now = datetime.now(timezone.utc)
    return UserProfile(
        uid=uid,
        first_name=first_name,
        last_name=last_name,
        email=email,
        handle=handle,
        created_at=now,
        updated_at=now,
    )


def make_read(content_id: str = "content-1", user_id: str = "test-user-123", **overrides) -> ReadContent:
    now = datetime.now(timezone.utc)
    fields = {
        "id": content_id,
        "user_id": user_id,
        "title": "First post",
        "body": "Hello world",
        "read_time": 1,
        "short_form": True,
        "published": True,
        "published_at": now,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return ReadContent(**fields)


def make_listen(content_id: str = "content-2", user_id: str = "test-user-123", **overrides) -> ListenContent:
    now = datetime.now(timezone.utc)
    fields = {
        "id": content_id,
        "user_id": user_id,
        "title": "Episode 1",
        "audio_url": "https://cdn.example.com/audio/test-user-123/1_ep.mp3",
        "audio_path": "audio/test-user-123/1_ep.mp3",
        "duration": 120,
        "published": True,
        "published_at": now,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return ListenContent(**fields)


def make_watch(content_id: str = "content-3", user_id: str = "test-user-123", **overrides) -> WatchContent:
    now = datetime.now(timezone.utc)
    fields = {
        "id": content_id,
        "user_id": user_id,
        "title": "My video",
        "video_url": "https://cdn.example.com/video/test-user-123/1_v.webm",
        "video_path": "video/test-user-123/1_v.webm",
        "thumbnail_url": "https://cdn.example.com/thumbnails/test-user-123/1_t.jpg",
        "thumbnail_path": "thumbnails/test-user-123/1_t.jpg",
        "duration": 30,
        "published": True,
        "published_at": now,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return WatchContent(**fields)


def mock_query(data: list | None = None) -> MagicMock:
    """
    Create a chainable PostgREST query builder mock.

    Every builder method returns the same mock, and execute() returns a
    response whose .data is the given rows.
    """
    query = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "in_", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [])
    return query


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def test_auth_service() -> AuthService:
    """Auth service that validates tokens signed with TEST_JWT_SECRET."""
    with patch("modules.auth.service.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        mock_settings.return_value.admin_email = TEST_ADMIN_EMAIL
        yield AuthService()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
