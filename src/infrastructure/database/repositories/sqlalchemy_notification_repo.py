"""SQLAlchemy implementation of Notification repository."""

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Notification | None:
        """Get a notification by ID."""
        stmt = select(NotificationModel).where(NotificationModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_profile(self, profile_id: int) -> list[Notification]:
        """Get a profile's notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.profile_id == profile_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_unread_count(self, profile_id: int) -> int:
        """Get the count of unread notifications for a profile."""
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.profile_id == profile_id,
            NotificationModel.read.is_(False),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        model = self._to_model(notification)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def mark_read(self, id: int) -> bool:
        """Mark a notification as read."""
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == id)
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[return-value]

    async def delete(self, id: int) -> bool:
        """Delete a notification."""
        stmt = (
            delete(NotificationModel)
            .where(NotificationModel.id == id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[return-value]

    async def delete_for_profile(self, profile_id: int) -> int:
        """Delete all notifications of a profile. Returns count deleted."""
        stmt = (
            delete(NotificationModel)
            .where(NotificationModel.profile_id == profile_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert ORM model to domain entity."""
        return Notification(
            id=model.id,
            profile_id=model.profile_id,
            type=model.type,
            title=model.title,
            content=model.content,
            link=model.link,
            read=model.read,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        """Convert domain entity to ORM model."""
        return NotificationModel(
            id=entity.id,
            profile_id=entity.profile_id,
            type=entity.type,
            title=entity.title,
            content=entity.content,
            link=entity.link,
            read=entity.read,
            created_at=entity.created_at,
        )
