"""SQLAlchemy implementation of Service repository."""

from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.service import Service
from infrastructure.database.errors import unique_violation_guard
from infrastructure.database.models import ServiceModel


class SQLAlchemyServiceRepository:
    """SQLAlchemy implementation of IServiceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Service | None:
        """Get a service by ID."""
        stmt = select(ServiceModel).where(ServiceModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_name_and_provider(self, name: str, provider_id: int) -> Service | None:
        """Get a provider's service by exact name."""
        stmt = select(ServiceModel).where(
            ServiceModel.provider_id == provider_id,
            ServiceModel.name == name.strip(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_provider(self, provider_id: int) -> list[Service]:
        """Get all services offered by a provider."""
        stmt = (
            select(ServiceModel)
            .where(ServiceModel.provider_id == provider_id)
            .order_by(ServiceModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_for_providers_batch(self, provider_ids: list[int]) -> dict[int, list[Service]]:
        """Get services for multiple providers in a single query."""
        if not provider_ids:
            return {}

        stmt = (
            select(ServiceModel)
            .where(ServiceModel.provider_id.in_(provider_ids))
            .order_by(ServiceModel.id)
        )
        result = await self._session.execute(stmt)

        services_by_provider: dict[int, list[Service]] = defaultdict(list)
        for model in result.scalars():
            services_by_provider[model.provider_id].append(self._to_entity(model))

        return dict(services_by_provider)

    async def create(self, service: Service) -> Service:
        """Create a new service."""
        model = self._to_model(service)
        async with unique_violation_guard("service"):
            self._session.add(model)
            await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a service."""
        stmt = select(ServiceModel).where(ServiceModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_for_provider(self, provider_id: int) -> int:
        """Delete every service of a provider. Returns count deleted."""
        stmt = (
            delete(ServiceModel)
            .where(ServiceModel.provider_id == provider_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    def _to_entity(self, model: ServiceModel) -> Service:
        """Convert ORM model to domain entity."""
        return Service(
            id=model.id,
            provider_id=model.provider_id,
            name=model.name,
            price=model.price,
            duration_minutes=model.duration_minutes,
            description=model.description,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Service) -> ServiceModel:
        """Convert domain entity to ORM model."""
        return ServiceModel(
            id=entity.id,
            provider_id=entity.provider_id,
            name=entity.name,
            price=entity.price,
            duration_minutes=entity.duration_minutes,
            description=entity.description,
            created_at=entity.created_at,
        )
