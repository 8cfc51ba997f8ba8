"""Admin service layer: statistics, profile moderation and visit counting."""

from collections.abc import Callable

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.admin import AdminStats
from domain.entities.profile import Profile, ProfileRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_service import ProfileService

logger = structlog.get_logger()


class AdminService:
    """Service layer for admin-only roll-ups and moderation.

    Callers are expected to have checked the admin flag already.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        profile_service: ProfileService,
    ) -> None:
        self._uow_factory = uow_factory
        self._profiles = profile_service

    async def get_stats(self) -> AdminStats:
        """Profile counts by role, message volume and providers per location type."""
        async with self._uow_factory() as uow:
            return AdminStats(
                total_users=await uow.profiles.count(),
                total_providers=await uow.profiles.count(ProfileRole.PROVIDER),
                total_clients=await uow.profiles.count(ProfileRole.CLIENT),
                messages_sent=await uow.messages.count(),
                providers_by_location_type=await uow.profiles.count_providers_by_location_type(),
            )

    async def get_all_profiles(self) -> list[Profile]:
        """Every profile, unfiltered, in creation order."""
        async with self._uow_factory() as uow:
            return await uow.profiles.search()

    async def delete_profile(self, profile_id: int) -> None:
        """Delete any non-admin profile with the same cascade as self-deletion."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)

            await self._profiles.purge(uow, profile)
            await uow.commit()

        logger.info("admin_profile_deleted", profile_id=profile_id)

    async def get_page_visit_count(self) -> int:
        """Current value of the visit counter."""
        async with self._uow_factory() as uow:
            return await uow.page_visits.get_count()

    async def track_visit(self) -> None:
        """Count one visit. No deduplication; failures are logged and dropped."""
        try:
            async with self._uow_factory() as uow:
                await uow.page_visits.increment()
                await uow.commit()
        except Exception:
            logger.exception("page_visit_tracking_failed")
