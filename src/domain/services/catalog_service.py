"""Catalog service layer: the services providers offer."""

from collections.abc import Callable
from decimal import Decimal

from core.exceptions import (
    DuplicateEntryError,
    DuplicateServiceError,
    ErrorCode,
    NotPermittedError,
    ServiceNotFoundError,
)
from domain.entities.profile import Profile
from domain.entities.service import Service
from domain.repositories.unit_of_work import IUnitOfWork


class CatalogService:
    """Service layer for provider Service listings."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_for_provider(self, provider_id: int) -> list[Service]:
        """Get all services offered by a provider."""
        async with self._uow_factory() as uow:
            return await uow.services.list_for_provider(provider_id)

    async def create(
        self,
        requester: Profile,
        name: str,
        price: Decimal | None = None,
        duration_minutes: int | None = None,
        description: str | None = None,
    ) -> Service:
        """Create a service. Only providers may, and names are unique per provider."""
        if not requester.is_provider:
            raise NotPermittedError(
                "Only providers can offer services",
                ErrorCode.PROVIDER_ROLE_REQUIRED,
            )

        service = Service(
            provider_id=requester.id,  # type: ignore[arg-type]
            name=name,
            price=price,
            duration_minutes=duration_minutes,
            description=description,
        )

        async with self._uow_factory() as uow:
            existing = await uow.services.get_by_name_and_provider(
                service.name, service.provider_id
            )
            if existing:
                raise DuplicateServiceError(service.name)

            try:
                created = await uow.services.create(service)
            except DuplicateEntryError as exc:
                raise DuplicateServiceError(service.name) from exc

            await uow.commit()
            return created

    async def delete(self, requester_id: int, service_id: int) -> None:
        """Delete a service owned by the requester."""
        async with self._uow_factory() as uow:
            service = await uow.services.get(service_id)
            if not service:
                raise ServiceNotFoundError(service_id)
            if service.provider_id != requester_id:
                raise NotPermittedError(
                    "You can only delete your own services",
                    ErrorCode.NOT_OWNER,
                )

            await uow.services.delete(service_id)
            await uow.commit()
