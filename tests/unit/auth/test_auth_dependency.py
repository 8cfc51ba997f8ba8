"""Unit tests for authentication dependencies."""

from unittest.mock import AsyncMock

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import (
    get_admin_profile,
    get_current_profile,
    get_current_user,
    get_my_profile,
    get_optional_user,
)
from core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
    ProfileNotFoundError,
)
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from tests.unit.conftest import make_profile


@pytest.fixture
def mock_auth_provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret", algorithm="HS256", expire_minutes=30, jwks_url=""
    )


@pytest.fixture
def test_token_user() -> TokenUser:
    return TokenUser(id="identity-1", email="clara@example.com")


# --- get_current_user ---


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_current_user(credentials, mock_auth_provider)

        assert result.id == "identity-1"
        assert result.email == test_token_user.email

    @pytest.mark.asyncio
    async def test_raises_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_raises_when_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(credentials, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_raises_when_expired_token(self, test_token_user: TokenUser):
        expired = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=-1, jwks_url=""
        )
        token = expired.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        normal_provider = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=30, jwks_url=""
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(credentials, normal_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN


# --- get_optional_user ---


class TestGetOptionalUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_optional_user(credentials, mock_auth_provider)

        assert result is not None
        assert result.id == "identity-1"

    @pytest.mark.asyncio
    async def test_returns_none_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        assert await get_optional_user(None, mock_auth_provider) is None

    @pytest.mark.asyncio
    async def test_returns_none_for_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        assert await get_optional_user(credentials, mock_auth_provider) is None


# --- profile resolution ---


class TestProfileDependencies:
    @pytest.mark.asyncio
    async def test_current_profile_requires_onboarding(self, test_token_user: TokenUser):
        service = AsyncMock()
        service.get_by_identity.return_value = None

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_profile(test_token_user, service)

        assert exc_info.value.error_code == ErrorCode.PROFILE_REQUIRED
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_current_profile_resolves_by_identity(self, test_token_user: TokenUser):
        service = AsyncMock()
        service.get_by_identity.return_value = make_profile(1, "clara")

        profile = await get_current_profile(test_token_user, service)

        assert profile.username == "clara"
        service.get_by_identity.assert_called_once_with("identity-1")

    @pytest.mark.asyncio
    async def test_my_profile_missing_is_not_found(self, test_token_user: TokenUser):
        service = AsyncMock()
        service.get_by_identity.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await get_my_profile(test_token_user, service)

    @pytest.mark.asyncio
    async def test_admin_profile_rejects_non_admin(self):
        with pytest.raises(AuthorizationError) as exc_info:
            await get_admin_profile(make_profile(1))

        assert exc_info.value.error_code == ErrorCode.ADMIN_REQUIRED
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_profile_accepts_admin(self):
        admin = make_profile(1, is_admin=True)

        assert await get_admin_profile(admin) is admin


# --- import order ---


def test_auth_dependencies_import_before_routes() -> None:
    """Loading the auth module first must not pull in the half-loaded route package."""
    import os
    import subprocess
    import sys
    from pathlib import Path

    src = Path(__file__).resolve().parents[3] / "src"
    env = {**os.environ, "PYTHONPATH": str(src)}
    result = subprocess.run(
        [sys.executable, "-c", "import api.dependencies.auth; import api.v1"],
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0, result.stderr
