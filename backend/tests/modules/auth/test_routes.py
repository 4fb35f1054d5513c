"""
Tests for auth API endpoints.
"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, get_profile_service
from modules.auth.models import AuthSession, SignInResult, SignUpResult
from modules.auth.exceptions import InvalidCredentialsError, SignUpError
from modules.auth.service import AuthService

from tests.conftest import create_test_token, make_profile, TEST_ADMIN_EMAIL, TEST_JWT_SECRET

COOKIE_NAME = "willerspace_session"


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _session() -> AuthSession:
    return AuthSession(access_token="access-123", refresh_token="refresh-123", expires_in=3600)


class TestSignUp:
    """Tests for POST /api/auth/signup"""

    def test_sign_up_sets_cookie(self, app, client):
        service = AsyncMock()
        service.sign_up.return_value = SignUpResult(
            profile=make_profile(uid="new-user", handle=None),
            session=_session(),
        )
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post("/api/auth/signup", json={
            "email": "new@example.com",
            "password": "secret1",
            "first_name": " Ada ",
            "last_name": "Lovelace",
        })

        assert response.status_code == 201
        assert response.json()["profile"]["handle"] is None
        assert f"{COOKIE_NAME}=access-123" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()
        service.sign_up.assert_awaited_once_with(
            email="new@example.com",
            password="secret1",
            first_name="Ada",
            last_name="Lovelace",
        )

    def test_sign_up_without_session(self, app, client):
        service = AsyncMock()
        service.sign_up.return_value = SignUpResult(profile=make_profile(handle=None))
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post("/api/auth/signup", json={
            "email": "new@example.com",
            "password": "secret1",
            "first_name": "Ada",
            "last_name": "Lovelace",
        })

        assert response.status_code == 201
        assert "set-cookie" not in response.headers

    def test_sign_up_rejected(self, app, client):
        service = AsyncMock()
        service.sign_up.side_effect = SignUpError("User already registered", "new@example.com")
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post("/api/auth/signup", json={
            "email": "new@example.com",
            "password": "secret1",
            "first_name": "Ada",
            "last_name": "Lovelace",
        })

        assert response.status_code == 422
        assert response.json()["detail"] == "User already registered"

    def test_sign_up_invalid_body(self, app, client):
        app.dependency_overrides[get_auth_service] = lambda: AsyncMock()
        response = client.post("/api/auth/signup", json={"email": "nope"})
        assert response.status_code == 422


class TestSignIn:
    """Tests for POST /api/auth/signin"""

    def test_sign_in_sets_cookie(self, app, client):
        service = AsyncMock()
        service.sign_in.return_value = SignInResult(
            user_id="test-user-123",
            email="test@example.com",
            session=_session(),
        )
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post("/api/auth/signin", json={
            "email": "test@example.com",
            "password": "secret1",
        })

        assert response.status_code == 200
        assert response.json()["session"]["access_token"] == "access-123"
        cookie = response.headers["set-cookie"]
        assert f"{COOKIE_NAME}=access-123" in cookie
        assert "samesite=lax" in cookie.lower()

    def test_sign_in_bad_credentials(self, app, client):
        service = AsyncMock()
        service.sign_in.side_effect = InvalidCredentialsError()
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post("/api/auth/signin", json={
            "email": "test@example.com",
            "password": "wrong",
        })

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password."
        assert response.json()["code"] == "INVALID_CREDENTIALS"


class TestSignOut:
    def test_sign_out_clears_cookie(self, client):
        response = client.post("/api/auth/signout")
        assert response.status_code == 204
        assert f'{COOKIE_NAME}=""' in response.headers["set-cookie"]


class TestMe:
    """Tests for GET /api/auth/me"""

    def test_requires_auth(self, app, client, test_auth_service):
        app.dependency_overrides[get_auth_service] = lambda: test_auth_service
        app.dependency_overrides[get_profile_service] = lambda: AsyncMock()
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_expired_token(self, app, client, test_auth_service):
        app.dependency_overrides[get_auth_service] = lambda: test_auth_service
        app.dependency_overrides[get_profile_service] = lambda: AsyncMock()
        token = create_test_token(expired=True)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_needs_handle(self, app, client, test_auth_service, auth_headers):
        profiles = AsyncMock()
        profiles.get_profile.return_value = make_profile(handle=None)
        app.dependency_overrides[get_auth_service] = lambda: test_auth_service
        app.dependency_overrides[get_profile_service] = lambda: profiles

        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == "test-user-123"
        assert data["needs_handle"] is True
        assert data["is_admin"] is False
        assert data["needs_profile"] is False

    def test_needs_profile_after_oauth_sign_in(self, app, client, test_auth_service, auth_headers):
        profiles = AsyncMock()
        profiles.get_profile.return_value = None
        app.dependency_overrides[get_auth_service] = lambda: test_auth_service
        app.dependency_overrides[get_profile_service] = lambda: profiles

        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["profile"] is None
        assert data["needs_profile"] is True
        assert data["needs_handle"] is False

    def test_session_cookie_authenticates(self, app, client, test_auth_service):
        profiles = AsyncMock()
        profiles.get_profile.return_value = make_profile(email=TEST_ADMIN_EMAIL)
        app.dependency_overrides[get_auth_service] = lambda: test_auth_service
        app.dependency_overrides[get_profile_service] = lambda: profiles
        token = create_test_token(email=TEST_ADMIN_EMAIL)

        response = client.get("/api/auth/me", headers={"Cookie": f"{COOKIE_NAME}={token}"})

        assert response.status_code == 200
        data = response.json()
        assert data["needs_handle"] is False
        assert data["is_admin"] is True


class TestEnsureProfile:
    """Tests for POST /api/auth/profile"""

    @pytest.fixture
    def profiles(self) -> AsyncMock:
        profiles = AsyncMock()
        profiles.get_profile.return_value = None
        profiles.create_profile.return_value = make_profile(uid="google-user", handle=None)
        return profiles

    @pytest.fixture
    def auth_service(self, profiles):
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
            mock_settings.return_value.admin_email = TEST_ADMIN_EMAIL
            yield AuthService(profiles=profiles)

    def test_google_user_gets_profile(self, app, client, auth_service, profiles):
        app.dependency_overrides[get_auth_service] = lambda: auth_service
        token = create_test_token(
            user_id="google-user",
            email="ada@gmail.com",
            user_metadata={"full_name": "Ada Lovelace", "picture": "https://lh3.googleusercontent.com/a/ada"},
        )

        response = client.post("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["handle"] is None
        profiles.create_profile.assert_awaited_once_with(
            uid="google-user",
            email="ada@gmail.com",
            first_name="Ada",
            last_name="Lovelace",
            photo_url="https://lh3.googleusercontent.com/a/ada",
        )

    def test_requires_auth(self, app, client, auth_service, profiles):
        app.dependency_overrides[get_auth_service] = lambda: auth_service

        response = client.post("/api/auth/profile")

        assert response.status_code == 401
        profiles.create_profile.assert_not_called()
