"""Review domain entities."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Review:
    """Domain entity for a client's review of a provider. Never updated in place."""

    client_id: int
    provider_id: int
    rating: int
    id: int | None = None
    text: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class ReviewCheck:
    """Read-only value object: whether a client already reviewed a provider."""

    has_reviewed: bool
    review_id: int | None = None


@dataclass(frozen=True, slots=True)
class RatingSummary:
    """Aggregated rating of a provider."""

    average: float | None
    count: int
