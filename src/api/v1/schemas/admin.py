"""Pydantic schemas for Admin API."""

from pydantic import BaseModel, ConfigDict

from domain.entities.admin import AdminStats


class LocationTypeCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    location_type: str
    count: int


class AdminStatsResponse(BaseModel):
    """Dashboard roll-up."""

    total_users: int
    total_providers: int
    total_clients: int
    messages_sent: int
    providers_by_location_type: list[LocationTypeCountResponse]

    @classmethod
    def from_entity(cls, stats: AdminStats) -> "AdminStatsResponse":
        return cls(
            total_users=stats.total_users,
            total_providers=stats.total_providers,
            total_clients=stats.total_clients,
            messages_sent=stats.messages_sent,
            providers_by_location_type=[
                LocationTypeCountResponse.model_validate(c)
                for c in stats.providers_by_location_type
            ],
        )


class AdminStatsDetailResponse(BaseModel):
    data: AdminStatsResponse


class PageVisitResponse(BaseModel):
    """Current visit counter."""

    count: int
