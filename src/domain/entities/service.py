"""Service (offering) domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class Service:
    """Domain entity for a service a provider offers."""

    provider_id: int
    name: str
    id: int | None = None
    price: Decimal | None = None
    duration_minutes: int | None = None
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Trim surrounding whitespace so uniqueness compares what users see."""
        self.name = self.name.strip()
