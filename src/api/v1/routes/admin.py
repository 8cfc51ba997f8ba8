"""Admin API routes and public visit tracking."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import AdminProfile
from api.dependencies.services import get_admin_service
from api.v1.schemas.admin import (
    AdminStatsDetailResponse,
    AdminStatsResponse,
    PageVisitResponse,
)
from api.v1.schemas.profile import ProfileResponse, ProfileSummaryListResponse
from core.rate_limit import limiter
from domain.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])

visits_router = APIRouter(tags=["visits"])


@router.get(
    "/stats",
    response_model=AdminStatsDetailResponse,
    summary="Dashboard statistics",
    responses={403: {"description": "Admin access required"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_stats(
    request: Request,
    admin: AdminProfile,
    service: AdminService = Depends(get_admin_service),
) -> AdminStatsDetailResponse:
    """Profile counts by role, messages sent and providers per location type."""
    stats = await service.get_stats()
    return AdminStatsDetailResponse(data=AdminStatsResponse.from_entity(stats))


@router.get(
    "/profiles",
    response_model=ProfileSummaryListResponse,
    summary="List all profiles",
    responses={403: {"description": "Admin access required"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_all_profiles(
    request: Request,
    admin: AdminProfile,
    service: AdminService = Depends(get_admin_service),
) -> ProfileSummaryListResponse:
    """Every profile in creation order."""
    profiles = await service.get_all_profiles()
    return ProfileSummaryListResponse(data=[ProfileResponse.from_entity(p) for p in profiles])


@router.get(
    "/page-visits",
    response_model=PageVisitResponse,
    summary="Site visit count",
    responses={403: {"description": "Admin access required"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_page_visits(
    request: Request,
    admin: AdminProfile,
    service: AdminService = Depends(get_admin_service),
) -> PageVisitResponse:
    """Current value of the visit counter."""
    return PageVisitResponse(count=await service.get_page_visit_count())


@router.delete(
    "/profiles/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={
        400: {"description": "Admin profiles cannot be deleted"},
        403: {"description": "Admin access required"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: int,
    admin: AdminProfile,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Delete a profile and everything referencing it."""
    await service.delete_profile(profile_id)


@visits_router.post(
    "/track-visit",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Count a site visit",
)
async def track_visit(
    request: Request,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Increment the visit counter. Always succeeds."""
    await service.track_visit()
