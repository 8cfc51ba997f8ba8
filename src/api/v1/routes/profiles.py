"""Profile API routes: directory listing, onboarding and self-service."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser, MyProfile
from api.dependencies.services import get_directory_service, get_profile_service
from api.v1.schemas.profile import (
    ProfileCreate,
    ProfileDetailEnvelope,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileMeResponse,
    ProfileSingleResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileWithServicesResponse,
    UsernameAvailabilityResponse,
    UsernameCheck,
    UsernameUpdate,
)
from core.exceptions import ErrorCode, InvalidOperationError
from core.rate_limit import limiter
from domain.entities.profile import LocationType, ProfileFilter, ProfileSort
from domain.services.directory_service import DirectoryService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _split_csv(values: list[str] | None) -> tuple[str, ...]:
    """Accept both repeated query params and comma-separated values."""
    if not values:
        return ()
    return tuple(part.strip() for value in values for part in value.split(",") if part.strip())


def _parse_location_types(values: list[str] | None) -> tuple[LocationType, ...]:
    try:
        return tuple(LocationType(v) for v in _split_csv(values))
    except ValueError as exc:
        raise InvalidOperationError(
            "Unknown location type", ErrorCode.VALIDATION_ERROR
        ) from exc


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="Search the directory",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    services: list[str] | None = Query(None, description="Service names (any match)"),
    location_types: list[str] | None = Query(None, description="Location types (any match)"),
    search: str | None = Query(None, max_length=100, description="Username or location text"),
    lat: float | None = Query(None, ge=-90, le=90),
    lng: float | None = Query(None, ge=-180, le=180),
    radius: float | None = Query(None, gt=0, description="Radius in kilometres"),
    sort: ProfileSort = Query(ProfileSort.DEFAULT),
    service: DirectoryService = Depends(get_directory_service),
) -> ProfileListResponse:
    """List profiles with their services.

    Criteria combine with AND; values inside `services` or `location_types`
    combine with OR. The radius filter applies only when `lat`, `lng` and
    `radius` are all given.
    """
    criteria = ProfileFilter(
        services=_split_csv(services),
        location_types=_parse_location_types(location_types),
        search=search or None,
        lat=lat,
        lng=lng,
        radius=radius,
    )
    results = await service.list_profiles(criteria, sort)
    return ProfileListResponse(
        data=[ProfileWithServicesResponse.from_bundle(r) for r in results]
    )


@router.get(
    "/me",
    response_model=ProfileMeResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile yet"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    profile: MyProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileMeResponse:
    """Get the caller's profile including services."""
    bundle = await service.get_with_services(profile.id)  # type: ignore[arg-type]
    return ProfileMeResponse(data=ProfileWithServicesResponse.from_bundle(bundle))


@router.put(
    "/me",
    response_model=ProfileSingleResponse,
    summary="Update my profile",
    responses={404: {"description": "No profile yet"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    profile: MyProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileSingleResponse:
    """Update bio, location and image fields. Omitted fields stay unchanged."""
    updated = await service.update(
        profile.id,  # type: ignore[arg-type]
        body.model_dump(exclude_unset=True),
    )
    return ProfileSingleResponse(data=ProfileResponse.from_entity(updated))


@router.put(
    "/me/username",
    response_model=ProfileSingleResponse,
    summary="Change my username",
    responses={
        404: {"description": "No profile yet"},
        409: {"description": "Username taken"},
        429: {"description": "Changed too recently"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def change_my_username(
    request: Request,
    body: UsernameUpdate,
    profile: MyProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileSingleResponse:
    """Change the caller's username, at most once per cooldown window."""
    updated = await service.change_username(profile.id, body.username)  # type: ignore[arg-type]
    return ProfileSingleResponse(data=ProfileResponse.from_entity(updated))


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my profile",
    responses={
        400: {"description": "Admin profiles cannot be deleted"},
        404: {"description": "No profile yet"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def delete_my_profile(
    request: Request,
    profile: MyProfile,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete the caller's profile with its services, reviews, messages and notifications."""
    await service.delete(profile.id)  # type: ignore[arg-type]


@router.post(
    "/check-username",
    response_model=UsernameAvailabilityResponse,
    summary="Check username availability",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def check_username(
    request: Request,
    body: UsernameCheck,
    service: ProfileService = Depends(get_profile_service),
) -> UsernameAvailabilityResponse:
    """Report whether a username is free (case-insensitive)."""
    available = await service.is_username_available(body.username)
    return UsernameAvailabilityResponse(available=available)


@router.post(
    "",
    response_model=ProfileSingleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create my profile",
    responses={409: {"description": "Profile exists or username taken"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileSingleResponse:
    """Onboard the authenticated identity as a client or provider."""
    profile = await service.create(
        identity_id=user.id,
        username=body.username,
        role=body.role,
        bio=body.bio,
        location=body.location,
        location_type=body.location_type,
        latitude=body.latitude,
        longitude=body.longitude,
        profile_image_url=body.profile_image_url,
    )
    return ProfileSingleResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/{profile_id}",
    response_model=ProfileDetailEnvelope,
    summary="Get a public profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: int,
    service: DirectoryService = Depends(get_directory_service),
) -> ProfileDetailEnvelope:
    """Get a profile with its services and reviews."""
    detail = await service.get_profile_detail(profile_id)
    return ProfileDetailEnvelope(data=ProfileDetailResponse.from_detail(detail))
