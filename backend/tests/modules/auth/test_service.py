import pytest
from unittest.mock import patch, MagicMock, AsyncMock
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.service import AuthService, display_name_from_metadata, split_display_name
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
    InvalidCredentialsError,
    SignUpError,
)
from shared.exceptions import ConflictError
from shared.models import AuthenticatedUser

from tests.conftest import make_profile


def _token(secret: str = "test-secret", **overrides) -> str:
    payload = {
        "sub": "user-123",
        "email": "test@example.com",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        "iat": datetime.now(timezone.utc),
        "aud": "authenticated",
        "role": "authenticated",
    }
    payload.update(overrides)
    return jwt.encode(payload, secret, algorithm="HS256")


def _session(access_token: str = "access-123") -> MagicMock:
    session = MagicMock()
    session.access_token = access_token
    session.refresh_token = "refresh-123"
    session.expires_in = 3600
    session.token_type = "bearer"
    return session


class TestValidateToken:
    @pytest.fixture
    def service(self):
        """Create auth service with mocked settings."""
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = "test-secret"
            mock_settings.return_value.admin_email = "Admin@Example.com"
            yield AuthService()

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        """Should validate a valid token and return user."""
        user = await service.validate_token(_token())
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == "user"
        assert user.email_verified is False

    @pytest.mark.asyncio
    async def test_email_confirmed_claim_marks_verified(self, service):
        token = _token(email_confirmed_at=datetime.now(timezone.utc).isoformat())
        user = await service.validate_token(token)
        assert user.email_verified is True

    @pytest.mark.asyncio
    async def test_google_metadata_fills_name_and_avatar(self, service):
        user = await service.validate_token(_token(user_metadata={
            "full_name": "Ada King Lovelace",
            "avatar_url": "https://lh3.googleusercontent.com/a/ada",
        }))
        assert user.display_name == "Ada King Lovelace"
        assert user.avatar_url == "https://lh3.googleusercontent.com/a/ada"

    @pytest.mark.asyncio
    async def test_no_metadata(self, service):
        user = await service.validate_token(_token())
        assert user.display_name is None
        assert user.avatar_url is None

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        token = _token(
            exp=datetime.now(timezone.utc) - timedelta(hours=1),
            iat=datetime.now(timezone.utc) - timedelta(hours=2),
        )
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        """Should raise InvalidTokenError for token signed with wrong secret."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token(_token(secret="wrong-secret"))

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        """Should raise InvalidTokenError for token with wrong audience."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token(_token(aud="wrong-audience"))

    @pytest.mark.asyncio
    async def test_not_configured(self):
        """Should refuse to validate without a JWT secret."""
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = ""
            service = AuthService()

        with pytest.raises(AuthNotConfiguredError):
            await service.validate_token(_token())

    def test_is_admin_matches_configured_email(self, service):
        admin = AuthenticatedUser(id="a", email="admin@example.com")
        other = AuthenticatedUser(id="b", email="someone@example.com")
        assert service.is_admin(admin) is True
        assert service.is_admin(other) is False

    def test_is_admin_false_when_unset(self):
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.admin_email = ""
            service = AuthService()
        assert service.is_admin(AuthenticatedUser(id="a", email="")) is False


class TestSignUp:
    @pytest.fixture
    def profiles(self):
        profiles = AsyncMock()
        profiles.create_profile.return_value = make_profile(uid="new-user", handle=None)
        return profiles

    @pytest.fixture
    def service(self, profiles):
        with patch("modules.auth.service.get_settings"):
            yield AuthService(profiles=profiles)

    @pytest.mark.asyncio
    @patch("modules.auth.service.get_supabase_anon_client")
    async def test_creates_user_and_profile(self, mock_client, service, profiles):
        client = mock_client.return_value
        client.auth.sign_up.return_value = MagicMock(
            user=MagicMock(id="new-user"),
            session=_session(),
        )

        result = await service.sign_up("new@example.com", "secret1", "Ada", "Lovelace")

        call = client.auth.sign_up.call_args.args[0]
        assert call["email"] == "new@example.com"
        assert call["options"]["data"]["display_name"] == "Ada Lovelace"
        profiles.create_profile.assert_awaited_once_with(
            uid="new-user",
            email="new@example.com",
            first_name="Ada",
            last_name="Lovelace",
        )
        assert result.profile.handle is None
        assert result.session.access_token == "access-123"

    @pytest.mark.asyncio
    @patch("modules.auth.service.get_supabase_anon_client")
    async def test_without_session_when_confirmation_required(self, mock_client, service):
        mock_client.return_value.auth.sign_up.return_value = MagicMock(
            user=MagicMock(id="new-user"),
            session=None,
        )

        result = await service.sign_up("new@example.com", "secret1", "Ada", "Lovelace")

        assert result.session is None

    @pytest.mark.asyncio
    @patch("modules.auth.service.get_supabase_anon_client")
    async def test_rejected_by_supabase(self, mock_client, service, profiles):
        mock_client.return_value.auth.sign_up.side_effect = Exception("User already registered")

        with pytest.raises(SignUpError, match="already registered"):
            await service.sign_up("new@example.com", "secret1", "Ada", "Lovelace")

        profiles.create_profile.assert_not_called()


class TestSignIn:
    @pytest.fixture
    def service(self):
        with patch("modules.auth.service.get_settings"):
            yield AuthService()

    @pytest.mark.asyncio
    @patch("modules.auth.service.get_supabase_anon_client")
    async def test_success(self, mock_client, service):
        mock_client.return_value.auth.sign_in_with_password.return_value = MagicMock(
            user=MagicMock(id="user-123", email="test@example.com"),
            session=_session("tok"),
        )

        result = await service.sign_in("test@example.com", "secret1")

        assert result.user_id == "user-123"
        assert result.session.access_token == "tok"

    @pytest.mark.asyncio
    @patch("modules.auth.service.get_supabase_anon_client")
    async def test_bad_credentials(self, mock_client, service):
        mock_client.return_value.auth.sign_in_with_password.side_effect = Exception(
            "Invalid login credentials"
        )

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.sign_in("test@example.com", "wrong")

        assert exc_info.value.message == "Invalid email or password."


class TestDisplayNames:
    def test_password_sign_up_metadata(self):
        assert display_name_from_metadata({"first_name": "Ada", "last_name": "Lovelace"}) == "Ada Lovelace"

    def test_provider_full_name(self):
        assert display_name_from_metadata({"full_name": " Ada Lovelace ", "name": "ada"}) == "Ada Lovelace"

    def test_provider_name_fallback(self):
        assert display_name_from_metadata({"name": "Ada"}) == "Ada"

    def test_empty(self):
        assert display_name_from_metadata({}) is None

    @pytest.mark.parametrize("name, expected", [
        ("Ada King Lovelace", ("Ada", "King Lovelace")),
        ("Ada", ("Ada", "")),
        ("  ", ("", "")),
        (None, ("", "")),
    ])
    def test_split(self, name, expected):
        assert split_display_name(name) == expected


class TestEnsureProfile:
    @pytest.fixture
    def profiles(self):
        profiles = AsyncMock()
        profiles.get_profile.return_value = None
        profiles.create_profile.return_value = make_profile(uid="google-user", handle=None)
        return profiles

    @pytest.fixture
    def service(self, profiles):
        with patch("modules.auth.service.get_settings"):
            yield AuthService(profiles=profiles)

    @pytest.fixture
    def google_user(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            id="google-user",
            email="ada@gmail.com",
            email_verified=True,
            display_name="Ada King Lovelace",
            avatar_url="https://lh3.googleusercontent.com/a/ada",
        )

    @pytest.mark.asyncio
    async def test_creates_profile_without_handle(self, service, profiles, google_user):
        profile = await service.ensure_profile(google_user)

        profiles.create_profile.assert_awaited_once_with(
            uid="google-user",
            email="ada@gmail.com",
            first_name="Ada",
            last_name="King Lovelace",
            photo_url="https://lh3.googleusercontent.com/a/ada",
        )
        assert profile.handle is None

    @pytest.mark.asyncio
    async def test_existing_profile_is_returned(self, service, profiles, google_user):
        existing = make_profile(uid="google-user", handle="ada")
        profiles.get_profile.return_value = existing

        assert await service.ensure_profile(google_user) == existing
        profiles.create_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_creation(self, service, profiles, google_user):
        created = make_profile(uid="google-user", handle=None)
        profiles.get_profile.side_effect = [None, created]
        profiles.create_profile.side_effect = ConflictError("duplicate key")

        assert await service.ensure_profile(google_user) == created

    @pytest.mark.asyncio
    async def test_conflict_without_row_is_raised(self, service, profiles, google_user):
        profiles.create_profile.side_effect = ConflictError("duplicate key")

        with pytest.raises(ConflictError):
            await service.ensure_profile(google_user)
