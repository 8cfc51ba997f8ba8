"""Review API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentProfile
from api.dependencies.services import get_review_service
from api.v1.schemas.review import (
    ReviewCheckResponse,
    ReviewCreate,
    ReviewDetailResponse,
    ReviewResponse,
)
from core.rate_limit import limiter
from domain.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get(
    "/check/{provider_id}",
    response_model=ReviewCheckResponse,
    summary="Check whether I reviewed a provider",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def check_review(
    request: Request,
    provider_id: int,
    profile: CurrentProfile,
    service: ReviewService = Depends(get_review_service),
) -> ReviewCheckResponse:
    """Report whether the caller has reviewed the provider, and which review."""
    check = await service.has_reviewed(profile.id, provider_id)  # type: ignore[arg-type]
    return ReviewCheckResponse(has_reviewed=check.has_reviewed, review_id=check.review_id)


@router.post(
    "",
    response_model=ReviewDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a provider",
    responses={
        400: {"description": "Self-review"},
        404: {"description": "Provider not found"},
        409: {"description": "Already reviewed"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_review(
    request: Request,
    body: ReviewCreate,
    profile: CurrentProfile,
    service: ReviewService = Depends(get_review_service),
) -> ReviewDetailResponse:
    """Leave one review per provider; updates the provider's rating."""
    review = await service.create(
        client_id=profile.id,  # type: ignore[arg-type]
        provider_id=body.provider_id,
        rating=body.rating,
        text=body.text,
    )
    return ReviewDetailResponse(data=ReviewResponse.from_entity(review))


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my review",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Review not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_review(
    request: Request,
    review_id: int,
    profile: CurrentProfile,
    service: ReviewService = Depends(get_review_service),
) -> None:
    """Delete a review the caller wrote; updates the provider's rating."""
    await service.delete(profile.id, review_id)  # type: ignore[arg-type]
