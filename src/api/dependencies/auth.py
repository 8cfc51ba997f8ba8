"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_profile_service
from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode, ProfileNotFoundError
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the authenticated identity.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    token = credentials.credentials
    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """
    Dependency to get the identity if authenticated.

    Returns:
        TokenUser if authenticated, None otherwise (no exception raised)
    """
    if not credentials:
        return None

    return await auth_provider.validate_token(credentials.credentials)


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]


async def get_current_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Resolve the caller's profile for routes that act on behalf of it.

    Raises:
        AuthenticationError: The identity has not completed onboarding
    """
    profile = await service.get_by_identity(user.id)
    if not profile:
        raise AuthenticationError(
            message="Create a profile before using this endpoint",
            error_code=ErrorCode.PROFILE_REQUIRED,
        )
    return profile


async def get_my_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Resolve the caller's profile for the ``/profiles/me`` routes.

    Raises:
        ProfileNotFoundError: The identity has no profile yet
    """
    profile = await service.get_by_identity(user.id)
    if not profile:
        raise ProfileNotFoundError("me")
    return profile


async def get_admin_profile(
    profile: Annotated[Profile, Depends(get_current_profile)],
) -> Profile:
    """
    Require the caller's profile to carry the admin flag.

    Raises:
        AuthorizationError: The profile is not an admin
    """
    if not profile.is_admin:
        raise AuthorizationError(
            message="Admin access required",
            error_code=ErrorCode.ADMIN_REQUIRED,
        )
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
MyProfile = Annotated[Profile, Depends(get_my_profile)]
AdminProfile = Annotated[Profile, Depends(get_admin_profile)]
