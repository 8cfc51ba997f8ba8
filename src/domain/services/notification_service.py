"""Notification service layer for creating and managing notifications."""

from collections.abc import Callable

import structlog

from core.exceptions import (
    ErrorCode,
    NotificationNotFoundError,
    NotPermittedError,
)
from domain.entities.notification import Notification
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class NotificationService:
    """Service layer for notification creation and management."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- In-transaction notification creation ---

    async def notify(
        self,
        uow: IUnitOfWork,
        profile_id: int,
        type: str,
        title: str,
        content: str,
        link: str | None = None,
    ) -> Notification:
        """Create a notification within an existing UoW transaction.

        Called by other services as the side effect of their own mutation;
        there is no client-facing way to create a notification.

        Args:
            uow: The active Unit of Work (caller manages commit).
            profile_id: The recipient profile.
            type: The notification type (use NotificationTypes constants).
            title: Short headline.
            content: Body text.
            link: Optional client-side route to open.

        Returns:
            The created Notification.
        """
        notification = Notification(
            profile_id=profile_id,
            type=type,
            title=title,
            content=content,
            link=link,
        )
        created = await uow.notifications.create(notification)
        logger.debug(
            "notification_created",
            notification_id=created.id,
            profile_id=profile_id,
            type=type,
        )
        return created

    # --- Read methods (use own UoW context) ---

    async def list_for_profile(self, profile_id: int) -> list[Notification]:
        """Get a profile's notifications, newest first."""
        async with self._uow_factory() as uow:
            return await uow.notifications.list_for_profile(profile_id)

    async def get_unread_count(self, profile_id: int) -> int:
        """Get the count of unread notifications."""
        async with self._uow_factory() as uow:
            return await uow.notifications.get_unread_count(profile_id)

    # --- Mutations (recipient only) ---

    async def mark_read(self, requester_id: int, notification_id: int) -> None:
        """Mark a notification as read. Marking it again is a no-op."""
        async with self._uow_factory() as uow:
            notification = await self._get_owned(uow, requester_id, notification_id)
            if notification.read:
                return
            await uow.notifications.mark_read(notification_id)
            await uow.commit()

    async def delete(self, requester_id: int, notification_id: int) -> None:
        """Delete one of the requester's notifications."""
        async with self._uow_factory() as uow:
            await self._get_owned(uow, requester_id, notification_id)
            await uow.notifications.delete(notification_id)
            await uow.commit()

    async def clear_all(self, profile_id: int) -> int:
        """Delete every notification of a profile. Returns count deleted."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.delete_for_profile(profile_id)
            await uow.commit()
            return count

    async def _get_owned(
        self, uow: IUnitOfWork, requester_id: int, notification_id: int
    ) -> Notification:
        notification = await uow.notifications.get(notification_id)
        if not notification:
            raise NotificationNotFoundError(notification_id)
        if notification.profile_id != requester_id:
            raise NotPermittedError(
                "You can only manage your own notifications",
                ErrorCode.NOT_OWNER,
            )
        return notification
