"""Profile domain entities and directory search value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.entities.review import Review
    from domain.entities.service import Service


class ProfileRole(StrEnum):
    """Whether the profile seeks or offers services."""

    CLIENT = "client"
    PROVIDER = "provider"


class LocationType(StrEnum):
    """Where a provider works."""

    STUDIO = "studio"
    HOUSE = "house"
    APARTMENT = "apartment"
    RENTED_SPACE = "rented_space"
    MOBILE = "mobile"


class ProfileSort(StrEnum):
    """Orderings offered by the directory listing."""

    DEFAULT = "default"
    RATING_HIGH = "rating_high"
    RATING_LOW = "rating_low"
    REVIEWS_HIGH = "reviews_high"
    REVIEWS_LOW = "reviews_low"


@dataclass
class Profile:
    """Domain entity for a platform identity (client or provider)."""

    identity_id: str
    username: str
    role: ProfileRole = ProfileRole.CLIENT
    id: int | None = None
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
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_provider(self) -> bool:
        return self.role == ProfileRole.PROVIDER

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True, slots=True)
class ProfileFilter:
    """Directory query criteria.

    Every field is optional. Fields combine with AND; values inside a
    multi-valued field combine with OR. The radius filter (kilometres) only
    applies when ``lat``, ``lng`` and ``radius`` are all present.
    """

    services: tuple[str, ...] = ()
    location_types: tuple[LocationType, ...] = ()
    search: str | None = None
    lat: float | None = None
    lng: float | None = None
    radius: float | None = None

    @property
    def has_radius(self) -> bool:
        return self.lat is not None and self.lng is not None and self.radius is not None


@dataclass(frozen=True, slots=True)
class ProfileWithServices:
    """Read-only value object: a profile bundled with its services."""

    profile: Profile
    services: list["Service"]


@dataclass(frozen=True, slots=True)
class ProfileDetail:
    """Read-only value object: public profile page data."""

    profile: Profile
    services: list["Service"]
    reviews: list["Review"]
