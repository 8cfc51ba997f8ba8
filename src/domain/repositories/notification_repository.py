"""Notification repository protocol."""

from typing import Protocol

from domain.entities.notification import Notification


class INotificationRepository(Protocol):
    """Repository interface for Notification entities."""

    async def get(self, id: int) -> Notification | None:
        """Get a notification by ID."""
        ...

    async def list_for_profile(self, profile_id: int) -> list[Notification]:
        """Get a profile's notifications, newest first."""
        ...

    async def get_unread_count(self, profile_id: int) -> int:
        """Count a profile's unread notifications."""
        ...

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        ...

    async def mark_read(self, id: int) -> bool:
        """Mark a notification as read. Already-read notifications still succeed."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a notification and return success status."""
        ...

    async def delete_for_profile(self, profile_id: int) -> int:
        """Delete all notifications of a profile. Returns count deleted."""
        ...
