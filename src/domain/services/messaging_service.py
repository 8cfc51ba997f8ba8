"""Messaging service layer: threads, sending and deletion."""

from collections.abc import Callable

import structlog

from core.exceptions import (
    ErrorCode,
    MessageNotFoundError,
    NotPermittedError,
    ProfileNotFoundError,
    SelfMessageError,
)
from domain.entities.message import Conversation, Message
from domain.entities.notification import NotificationTypes
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()


class MessagingService:
    """Service layer for direct messages between profiles.

    Conversations are derived from messages grouped by their unordered
    participant pair; nothing about a conversation is stored.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: NotificationService | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifications = notification_service

    async def list_conversations(self, profile_id: int) -> list[Conversation]:
        """One entry per counterpart with the latest message, most recent first."""
        async with self._uow_factory() as uow:
            latest = await uow.messages.list_latest_per_counterpart(profile_id)
            counterpart_ids = [m.counterpart_of(profile_id) for m in latest]
            counterparts = await uow.profiles.get_many(counterpart_ids)

            return [
                Conversation(
                    other_profile=counterparts.get(other_id),
                    other_profile_id=other_id,
                    last_message=message,
                )
                for message, other_id in zip(latest, counterpart_ids)
            ]

    async def list_messages(self, profile_id: int, other_id: int) -> list[Message]:
        """Full history between two profiles, oldest first."""
        async with self._uow_factory() as uow:
            return await uow.messages.list_between(profile_id, other_id)

    async def send_message(self, sender: Profile, receiver_id: int, content: str) -> Message:
        """Persist a message, then notify the receiver on a best-effort basis.

        The message is committed first and is the operation's result. The
        notification is written in its own transaction afterwards; if that
        fails the failure is logged and the send still succeeds.
        """
        if sender.id == receiver_id:
            raise SelfMessageError()

        async with self._uow_factory() as uow:
            receiver = await uow.profiles.get(receiver_id)
            if not receiver:
                raise ProfileNotFoundError(receiver_id)

            message = Message(
                sender_id=sender.id,  # type: ignore[arg-type]
                receiver_id=receiver_id,
                content=content,
            )
            created = await uow.messages.create(message)
            await uow.commit()

        await self._notify_receiver(sender, created)
        return created

    async def delete_message(self, requester_id: int, message_id: int) -> None:
        """Delete one message. Only its sender or receiver may do so."""
        async with self._uow_factory() as uow:
            message = await uow.messages.get(message_id)
            if not message:
                raise MessageNotFoundError(message_id)
            if not message.involves(requester_id):
                raise NotPermittedError(
                    "You can only delete messages you sent or received",
                    ErrorCode.NOT_OWNER,
                )

            await uow.messages.delete(message_id)
            await uow.commit()

    async def delete_conversation(self, requester_id: int, other_id: int) -> int:
        """Delete every message between two profiles, in both directions.

        Irreversible and does not need the counterpart's consent.
        """
        async with self._uow_factory() as uow:
            deleted = await uow.messages.delete_between(requester_id, other_id)
            await uow.commit()

        logger.info(
            "conversation_deleted",
            profile_id=requester_id,
            other_profile_id=other_id,
            deleted_count=deleted,
        )
        return deleted

    async def _notify_receiver(self, sender: Profile, message: Message) -> None:
        """Fan-out step: never raises."""
        if not self._notifications:
            return
        try:
            async with self._uow_factory() as uow:
                await self._notifications.notify(
                    uow,
                    profile_id=message.receiver_id,
                    type=NotificationTypes.MESSAGE,
                    title="New Message",
                    content=f"{sender.username} sent you a message",
                    link="/messages",
                )
                await uow.commit()
        except Exception:
            logger.exception(
                "notification_fanout_failed",
                message_id=message.id,
                receiver_id=message.receiver_id,
            )
