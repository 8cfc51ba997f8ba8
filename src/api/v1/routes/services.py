"""Service (offering) API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile
from api.dependencies.services import get_catalog_service
from api.v1.schemas.service import (
    ServiceCreate,
    ServiceDetailResponse,
    ServiceListResponse,
    ServiceResponse,
)
from core.rate_limit import limiter
from domain.services.catalog_service import CatalogService

router = APIRouter(prefix="/services", tags=["services"])


@router.get(
    "",
    response_model=ServiceListResponse,
    summary="List a provider's services",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def list_services(
    request: Request,
    provider_id: int = Query(..., description="Provider profile ID"),
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceListResponse:
    """Get all services a provider offers."""
    services = await service.list_for_provider(provider_id)
    return ServiceListResponse(data=[ServiceResponse.from_entity(s) for s in services])


@router.post(
    "",
    response_model=ServiceDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a service",
    responses={
        401: {"description": "Caller is not a provider"},
        409: {"description": "Service name already used by this provider"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_service(
    request: Request,
    body: ServiceCreate,
    profile: CurrentProfile,
    service: CatalogService = Depends(get_catalog_service),
) -> ServiceDetailResponse:
    """Add a service to the caller's provider profile."""
    created = await service.create(
        requester=profile,
        name=body.name,
        price=body.price,
        duration_minutes=body.duration_minutes,
        description=body.description,
    )
    return ServiceDetailResponse(data=ServiceResponse.from_entity(created))


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a service",
    responses={
        401: {"description": "Not the owner"},
        404: {"description": "Service not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_service(
    request: Request,
    service_id: int,
    profile: CurrentProfile,
    service: CatalogService = Depends(get_catalog_service),
) -> None:
    """Delete one of the caller's services."""
    await service.delete(profile.id, service_id)  # type: ignore[arg-type]
