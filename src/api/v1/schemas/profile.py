"""Pydantic schemas for Profile API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.review import ReviewResponse
from api.v1.schemas.service import ServiceResponse
from domain.entities.profile import (
    LocationType,
    Profile,
    ProfileDetail,
    ProfileRole,
    ProfileWithServices,
)

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class UsernameField(BaseModel):
    """Shared username validation."""

    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class UsernameCheck(UsernameField):
    """Schema for checking username availability."""


class UsernameAvailabilityResponse(BaseModel):
    available: bool


class UsernameUpdate(UsernameField):
    """Schema for changing the caller's username."""


class ProfileEditable(BaseModel):
    """Fields an owner may set on their profile."""

    bio: str | None = Field(None, max_length=1000)
    location: str | None = Field(None, max_length=255)
    location_type: LocationType | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    profile_image_url: str | None = Field(None, max_length=500)


class ProfileCreate(UsernameField, ProfileEditable):
    """Schema for onboarding: create the caller's profile."""

    role: ProfileRole = ProfileRole.CLIENT


class ProfileUpdate(ProfileEditable):
    """Partial update; only fields present in the body are changed."""


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 3,
                "username": "lashes_by_amy",
                "role": "provider",
                "bio": "Lash artist",
                "location": "Sydney CBD",
                "location_type": "studio",
                "latitude": -33.87,
                "longitude": 151.21,
                "profile_image_url": None,
                "rating": 4.5,
                "review_count": 2,
                "is_admin": False,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: int
    username: str
    role: ProfileRole
    bio: str | None = None
    location: str | None = None
    location_type: LocationType | None = None
    latitude: float | None = None
    longitude: float | None = None
    profile_image_url: str | None = None
    rating: float | None = None
    review_count: int = 0
    username_changed_at: datetime | None = None
    is_admin: bool = False
    created_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile)


class ProfileWithServicesResponse(ProfileResponse):
    """Profile with its services, as listed by the directory."""

    services: list[ServiceResponse] = Field(default_factory=list)

    @classmethod
    def from_bundle(cls, bundle: ProfileWithServices) -> "ProfileWithServicesResponse":
        return cls(
            **ProfileResponse.from_entity(bundle.profile).model_dump(),
            services=[ServiceResponse.from_entity(s) for s in bundle.services],
        )


class ProfileDetailResponse(ProfileWithServicesResponse):
    """Public profile page: profile, services and reviews."""

    reviews: list[ReviewResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: ProfileDetail) -> "ProfileDetailResponse":
        return cls(
            **ProfileResponse.from_entity(detail.profile).model_dump(),
            services=[ServiceResponse.from_entity(s) for s in detail.services],
            reviews=[ReviewResponse.from_entity(r) for r in detail.reviews],
        )


class ProfileListResponse(BaseModel):
    """Schema for list of profiles with services."""

    data: list[ProfileWithServicesResponse]


class ProfileSummaryListResponse(BaseModel):
    """Schema for list of bare profiles."""

    data: list[ProfileResponse]


class ProfileDetailEnvelope(BaseModel):
    data: ProfileDetailResponse


class ProfileMeResponse(BaseModel):
    data: ProfileWithServicesResponse


class ProfileSingleResponse(BaseModel):
    data: ProfileResponse
