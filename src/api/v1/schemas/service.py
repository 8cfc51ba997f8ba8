"""Pydantic schemas for Service API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.service import Service


class ServiceCreate(BaseModel):
    """Schema for creating a Service."""

    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    duration_minutes: int | None = Field(None, gt=0, le=24 * 60)
    description: str | None = Field(None, max_length=2000)


class ServiceResponse(BaseModel):
    """Schema for Service response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 7,
                "provider_id": 3,
                "name": "Lashes",
                "price": 80.0,
                "duration_minutes": 60,
                "description": "Classic lash extensions",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: int
    provider_id: int
    name: str
    price: float | None = None
    duration_minutes: int | None = None
    description: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id,  # type: ignore[arg-type]
            provider_id=service.provider_id,
            name=service.name,
            price=float(service.price) if service.price is not None else None,
            duration_minutes=service.duration_minutes,
            description=service.description,
            created_at=service.created_at,
        )


class ServiceListResponse(BaseModel):
    """Schema for list of Services."""

    data: list[ServiceResponse]


class ServiceDetailResponse(BaseModel):
    """Schema for single Service."""

    data: ServiceResponse
