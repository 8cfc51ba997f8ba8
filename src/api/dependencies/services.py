"""Service factories injected into route handlers and auth dependencies."""

from functools import lru_cache
from typing import Callable

from domain.services.admin_service import AdminService
from domain.services.catalog_service import CatalogService
from domain.services.directory_service import DirectoryService
from domain.services.messaging_service import MessagingService
from domain.services.notification_service import NotificationService
from domain.services.profile_service import ProfileService
from domain.services.review_service import ReviewService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_directory_service() -> DirectoryService:
    """Get Directory service instance."""
    return DirectoryService(get_uow_factory())


@lru_cache
def get_catalog_service() -> CatalogService:
    """Get Catalog service instance."""
    return CatalogService(get_uow_factory())


@lru_cache
def get_review_service() -> ReviewService:
    """Get Review service instance."""
    return ReviewService(get_uow_factory())


@lru_cache
def get_messaging_service() -> MessagingService:
    """Get Messaging service instance."""
    return MessagingService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(
        get_uow_factory(),
        profile_service=get_profile_service(),
    )
