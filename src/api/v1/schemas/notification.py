"""Pydantic schemas for Notification API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """A single notification."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    title: str
    content: str
    link: str | None = None
    read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Notification feed, newest first."""

    data: list[NotificationResponse]


class UnreadCountResponse(BaseModel):
    """Unread notification count."""

    count: int
