"""Admin statistics value objects."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LocationTypeCount:
    location_type: str
    count: int


@dataclass(frozen=True, slots=True)
class AdminStats:
    """Roll-up statistics shown on the admin dashboard."""

    total_users: int
    total_providers: int
    total_clients: int
    messages_sent: int
    providers_by_location_type: list[LocationTypeCount] = field(default_factory=list)
