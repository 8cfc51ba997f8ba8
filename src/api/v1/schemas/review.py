"""Pydantic schemas for Review API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.review import Review


class ReviewCreate(BaseModel):
    """Schema for creating a Review."""

    provider_id: int
    rating: int = Field(..., ge=1, le=5)
    text: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    """Schema for Review response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    provider_id: int
    rating: int
    text: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewResponse":
        return cls.model_validate(review)


class ReviewDetailResponse(BaseModel):
    """Schema for single Review."""

    data: ReviewResponse


class ReviewCheckResponse(BaseModel):
    """Whether the caller already reviewed a provider."""

    has_reviewed: bool
    review_id: int | None = None
