"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.message_repository import IMessageRepository
from domain.repositories.notification_repository import INotificationRepository
from domain.repositories.page_visit_repository import IPageVisitRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.review_repository import IReviewRepository
from domain.repositories.service_repository import IServiceRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    services: IServiceRepository
    reviews: IReviewRepository
    messages: IMessageRepository
    notifications: INotificationRepository
    page_visits: IPageVisitRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
