"""Profile service layer: onboarding, edits, username cooldown and deletion."""

import math
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from core.config import settings
from core.exceptions import (
    AdminProfileProtectedError,
    DuplicateEntryError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    UsernameCooldownError,
    UsernameTakenError,
)
from domain.entities.profile import LocationType, Profile, ProfileRole, ProfileWithServices
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.review_service import refresh_provider_rating

logger = structlog.get_logger()

SECONDS_PER_DAY = 86400

# Fields the owner may change through a profile update. Username has its own
# throttled operation; role and admin flag are not client-editable.
EDITABLE_FIELDS = frozenset(
    {"bio", "location", "location_type", "latitude", "longitude", "profile_image_url"}
)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        clock: Callable[[], datetime] = datetime.utcnow,
        cooldown_days: int = settings.username_cooldown_days,
        admin_identity_ids: frozenset[str] = settings.admin_identity_id_set,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._cooldown_days = cooldown_days
        self._admin_identity_ids = admin_identity_ids

    async def get_by_identity(self, identity_id: str) -> Profile | None:
        """Resolve the profile owned by an authenticated identity."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_identity(identity_id)

    async def get_with_services(self, profile_id: int) -> ProfileWithServices:
        """Get a profile together with its services."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)
            services = await uow.services.list_for_provider(profile_id)
            return ProfileWithServices(profile=profile, services=services)

    async def is_username_available(self, username: str) -> bool:
        """Check whether no profile uses the username (case-insensitive)."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_username(username) is None

    async def create(
        self,
        identity_id: str,
        username: str,
        role: ProfileRole = ProfileRole.CLIENT,
        bio: str | None = None,
        location: str | None = None,
        location_type: LocationType | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        profile_image_url: str | None = None,
    ) -> Profile:
        """Create the single profile of an identity (onboarding)."""
        profile = Profile(
            identity_id=identity_id,
            username=username,
            role=role,
            bio=bio,
            location=location,
            location_type=location_type,
            latitude=latitude,
            longitude=longitude,
            profile_image_url=profile_image_url,
            is_admin=identity_id in self._admin_identity_ids,
        )

        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_identity(identity_id):
                raise ProfileAlreadyExistsError()
            if await uow.profiles.get_by_username(username):
                raise UsernameTakenError(username)

            try:
                created = await uow.profiles.create(profile)
            except DuplicateEntryError as exc:
                # Lost a race; the driver detail names the violated column
                if "identity_id" in exc.constraint_detail:
                    raise ProfileAlreadyExistsError() from exc
                raise UsernameTakenError(username) from exc

            await uow.commit()

        logger.info(
            "profile_created",
            profile_id=created.id,
            role=created.role.value,
            is_admin=created.is_admin,
        )
        return created

    async def update(self, profile_id: int, changes: dict[str, Any]) -> Profile:
        """Apply an owner's partial update to the editable fields."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)

            for name, value in changes.items():
                setattr(profile, name, value)

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def change_username(self, profile_id: int, username: str) -> Profile:
        """Change a username, at most once per cooldown window.

        Setting the current username again is a no-op that neither checks nor
        consumes the cooldown.

        Raises:
            ProfileNotFoundError: the profile does not exist.
            UsernameCooldownError: the previous change is too recent.
            UsernameTakenError: another profile holds the username.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)

            if profile.username == username:
                return profile

            now = self._clock()
            if profile.username_changed_at is not None:
                elapsed = (now - profile.username_changed_at).total_seconds()
                days_since_change = elapsed / SECONDS_PER_DAY
                if days_since_change < self._cooldown_days:
                    raise UsernameCooldownError(
                        math.ceil(self._cooldown_days - days_since_change)
                    )

            existing = await uow.profiles.get_by_username(username)
            if existing and existing.id != profile.id:
                raise UsernameTakenError(username)

            old_username = profile.username
            profile.username = username
            profile.username_changed_at = now
            try:
                updated = await uow.profiles.update(profile)
            except DuplicateEntryError as exc:
                raise UsernameTakenError(username) from exc

            await uow.commit()

        logger.info(
            "username_changed",
            profile_id=profile_id,
            old_username=old_username,
            new_username=username,
        )
        return updated

    async def delete(self, profile_id: int) -> None:
        """Delete the caller's own profile and everything that references it."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)

            await self.purge(uow, profile)
            await uow.commit()

    async def purge(self, uow: IUnitOfWork, profile: Profile) -> None:
        """Remove a profile and all rows referencing it, inside the caller's transaction.

        Order: notifications, messages on either side, reviews as client or
        provider, services, then the profile row. Providers the profile had
        reviewed get their derived rating recomputed.

        Raises:
            AdminProfileProtectedError: admin profiles are never deleted.
            ProfileNotFoundError: the profile was never stored.
        """
        if profile.is_admin:
            raise AdminProfileProtectedError()
        profile_id = profile.id
        if profile_id is None:
            raise ProfileNotFoundError(profile.username)

        reviewed_provider_ids = await uow.reviews.list_provider_ids_reviewed_by(profile_id)

        notifications = await uow.notifications.delete_for_profile(profile_id)
        messages = await uow.messages.delete_involving(profile_id)
        reviews = await uow.reviews.delete_involving(profile_id)
        services = await uow.services.delete_for_provider(profile_id)

        for provider_id in reviewed_provider_ids:
            if provider_id != profile_id:
                await refresh_provider_rating(uow, provider_id)

        await uow.profiles.delete(profile_id)

        logger.info(
            "profile_purged",
            profile_id=profile_id,
            notifications=notifications,
            messages=messages,
            reviews=reviews,
            services=services,
        )
