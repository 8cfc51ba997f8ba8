"""Service repository protocol."""

from typing import Protocol

from domain.entities.service import Service


class IServiceRepository(Protocol):
    """Repository interface for Service entities."""

    async def get(self, id: int) -> Service | None:
        """Get a service by ID."""
        ...

    async def get_by_name_and_provider(self, name: str, provider_id: int) -> Service | None:
        """Get a provider's service by exact name."""
        ...

    async def list_for_provider(self, provider_id: int) -> list[Service]:
        """Get all services offered by a provider."""
        ...

    async def list_for_providers_batch(self, provider_ids: list[int]) -> dict[int, list[Service]]:
        """Get services for several providers in a single query."""
        ...

    async def create(self, service: Service) -> Service:
        """Create a service. Raises DuplicateEntryError on a unique violation."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a service and return success status."""
        ...

    async def delete_for_provider(self, provider_id: int) -> int:
        """Delete every service of a provider. Returns count deleted."""
        ...
