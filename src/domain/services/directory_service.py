"""Directory search: filter and rank provider listings."""

from collections.abc import Callable, Sequence

from core.config import settings
from core.exceptions import ProfileNotFoundError
from domain.entities.profile import (
    LocationType,
    Profile,
    ProfileDetail,
    ProfileFilter,
    ProfileSort,
    ProfileWithServices,
)
from domain.geo import haversine_km
from domain.repositories.unit_of_work import IUnitOfWork


def within_radius(
    profile: Profile, lat: float, lng: float, radius_km: float, include_mobile: bool = True
) -> bool:
    """Check a profile against the radius criterion (boundary inclusive)."""
    if not profile.has_coordinates:
        return False
    if not include_mobile and profile.location_type == LocationType.MOBILE:
        return False
    distance = haversine_km(lat, lng, profile.latitude, profile.longitude)  # type: ignore[arg-type]
    return distance <= radius_km


def sort_profiles(profiles: Sequence[Profile], sort: ProfileSort) -> list[Profile]:
    """Order profiles; missing ratings and counts rank as 0, ties by ascending id."""
    if sort == ProfileSort.RATING_HIGH:
        return sorted(profiles, key=lambda p: (-(p.rating or 0), p.id or 0))
    if sort == ProfileSort.RATING_LOW:
        return sorted(profiles, key=lambda p: (p.rating or 0, p.id or 0))
    if sort == ProfileSort.REVIEWS_HIGH:
        return sorted(profiles, key=lambda p: (-(p.review_count or 0), p.id or 0))
    if sort == ProfileSort.REVIEWS_LOW:
        return sorted(profiles, key=lambda p: (p.review_count or 0, p.id or 0))
    # Store order is creation order
    return sorted(profiles, key=lambda p: p.id or 0)


class DirectoryService:
    """Service layer for profile discovery."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        radius_includes_mobile: bool = settings.radius_includes_mobile,
    ) -> None:
        self._uow_factory = uow_factory
        self._radius_includes_mobile = radius_includes_mobile

    async def list_profiles(
        self,
        criteria: ProfileFilter | None = None,
        sort: ProfileSort = ProfileSort.DEFAULT,
    ) -> list[ProfileWithServices]:
        """List profiles matching every supplied criterion, with their services.

        An empty filter returns every profile, which clients use to build
        their suggestion indexes.
        """
        criteria = criteria or ProfileFilter()

        async with self._uow_factory() as uow:
            profiles = await uow.profiles.search(criteria)

            if criteria.has_radius:
                profiles = [
                    p
                    for p in profiles
                    if within_radius(
                        p,
                        criteria.lat,  # type: ignore[arg-type]
                        criteria.lng,  # type: ignore[arg-type]
                        criteria.radius,  # type: ignore[arg-type]
                        include_mobile=self._radius_includes_mobile,
                    )
                ]

            ordered = sort_profiles(profiles, sort)
            services_by_provider = await uow.services.list_for_providers_batch(
                [p.id for p in ordered if p.id is not None]
            )
            return [
                ProfileWithServices(
                    profile=p,
                    services=services_by_provider.get(p.id, []),  # type: ignore[arg-type]
                )
                for p in ordered
            ]

    async def get_profile_detail(self, profile_id: int) -> ProfileDetail:
        """Get a public profile page: the profile, its services and its reviews."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)

            services = await uow.services.list_for_provider(profile_id)
            reviews = await uow.reviews.list_for_provider(profile_id)
            return ProfileDetail(profile=profile, services=services, reviews=reviews)
