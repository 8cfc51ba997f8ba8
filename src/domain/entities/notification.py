"""Notification domain entities and type constants."""

from dataclasses import dataclass, field
from datetime import datetime


class NotificationTypes:
    """Notification type constants."""

    MESSAGE = "message"


@dataclass
class Notification:
    """Domain entity for an in-app notification.

    Only created as a side effect of another mutation; clients can read,
    mark and delete their own notifications but never create one.
    """

    profile_id: int
    type: str
    title: str
    content: str
    id: int | None = None
    link: str | None = None
    read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
