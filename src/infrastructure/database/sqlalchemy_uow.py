"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_message_repo import SQLAlchemyMessageRepository
from infrastructure.database.repositories.sqlalchemy_notification_repo import (
    SQLAlchemyNotificationRepository,
)
from infrastructure.database.repositories.sqlalchemy_page_visit_repo import (
    SQLAlchemyPageVisitRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_review_repo import SQLAlchemyReviewRepository
from infrastructure.database.repositories.sqlalchemy_service_repo import SQLAlchemyServiceRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def services(self) -> SQLAlchemyServiceRepository:
        """Get service repository."""
        return SQLAlchemyServiceRepository(self._require_session())

    @property
    def reviews(self) -> SQLAlchemyReviewRepository:
        """Get review repository."""
        return SQLAlchemyReviewRepository(self._require_session())

    @property
    def messages(self) -> SQLAlchemyMessageRepository:
        """Get message repository."""
        return SQLAlchemyMessageRepository(self._require_session())

    @property
    def notifications(self) -> SQLAlchemyNotificationRepository:
        """Get notification repository."""
        return SQLAlchemyNotificationRepository(self._require_session())

    @property
    def page_visits(self) -> SQLAlchemyPageVisitRepository:
        """Get page visit counter repository."""
        return SQLAlchemyPageVisitRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
