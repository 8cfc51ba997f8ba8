"""SQLAlchemy implementation of Message repository."""

from sqlalchemy import and_, case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.message import Message
from infrastructure.database.models import MessageModel


class SQLAlchemyMessageRepository:
    """SQLAlchemy implementation of IMessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Message | None:
        """Get a message by ID."""
        stmt = select(MessageModel).where(MessageModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_between(self, profile_id: int, other_id: int) -> list[Message]:
        """Get the full history between two profiles, oldest first."""
        stmt = (
            select(MessageModel)
            .where(self._between(profile_id, other_id))
            .order_by(MessageModel.created_at, MessageModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_latest_per_counterpart(self, profile_id: int) -> list[Message]:
        """Get the most recent message exchanged with each counterpart."""
        counterpart = case(
            (MessageModel.sender_id == profile_id, MessageModel.receiver_id),
            else_=MessageModel.sender_id,
        )
        # IDs grow with creation time, so the max ID is the latest message
        latest_ids = (
            select(func.max(MessageModel.id))
            .where(
                or_(
                    MessageModel.sender_id == profile_id,
                    MessageModel.receiver_id == profile_id,
                )
            )
            .group_by(counterpart)
        )
        stmt = (
            select(MessageModel)
            .where(MessageModel.id.in_(latest_ids))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, message: Message) -> Message:
        """Create a new message."""
        model = self._to_model(message)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a message."""
        stmt = select(MessageModel).where(MessageModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_between(self, profile_id: int, other_id: int) -> int:
        """Delete every message between two profiles. Returns count deleted."""
        stmt = (
            delete(MessageModel)
            .where(self._between(profile_id, other_id))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    async def delete_involving(self, profile_id: int) -> int:
        """Delete messages sent or received by a profile. Returns count deleted."""
        stmt = (
            delete(MessageModel)
            .where(
                or_(
                    MessageModel.sender_id == profile_id,
                    MessageModel.receiver_id == profile_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    async def count(self) -> int:
        """Count all messages."""
        stmt = select(func.count(MessageModel.id))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def _between(profile_id: int, other_id: int):  # type: ignore[no-untyped-def]
        """Both directions of a conversation."""
        return or_(
            and_(MessageModel.sender_id == profile_id, MessageModel.receiver_id == other_id),
            and_(MessageModel.sender_id == other_id, MessageModel.receiver_id == profile_id),
        )

    def _to_entity(self, model: MessageModel) -> Message:
        """Convert ORM model to domain entity."""
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            content=model.content,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Message) -> MessageModel:
        """Convert domain entity to ORM model."""
        return MessageModel(
            id=entity.id,
            sender_id=entity.sender_id,
            receiver_id=entity.receiver_id,
            content=entity.content,
            created_at=entity.created_at,
        )
