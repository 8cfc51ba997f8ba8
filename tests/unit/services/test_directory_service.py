"""Unit tests for directory search and ranking."""

import pytest

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import LocationType, ProfileFilter, ProfileRole, ProfileSort
from domain.entities.service import Service
from domain.geo import haversine_km
from domain.services.directory_service import DirectoryService, sort_profiles, within_radius
from tests.unit.conftest import FakeUnitOfWork, make_profile

SYDNEY = (-33.87, 151.21)
MELBOURNE = (-37.81, 144.96)


@pytest.fixture
def service(uow: FakeUnitOfWork) -> DirectoryService:
    return DirectoryService(lambda: uow, radius_includes_mobile=True)


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(*SYDNEY, *SYDNEY) == 0

    def test_sydney_to_melbourne(self):
        assert haversine_km(*SYDNEY, *MELBOURNE) == pytest.approx(713, abs=5)

    def test_is_symmetric(self):
        assert haversine_km(*SYDNEY, *MELBOURNE) == pytest.approx(
            haversine_km(*MELBOURNE, *SYDNEY)
        )

    def test_antipodal_points(self):
        assert haversine_km(0, 0, 0, 180) == pytest.approx(20015, abs=1)


class TestWithinRadius:
    def test_boundary_is_inclusive(self):
        profile = make_profile(1, latitude=SYDNEY[0], longitude=SYDNEY[1])
        distance = haversine_km(*MELBOURNE, *SYDNEY)

        assert within_radius(profile, *MELBOURNE, distance)

    def test_outside_radius(self):
        profile = make_profile(1, latitude=SYDNEY[0], longitude=SYDNEY[1])

        assert not within_radius(profile, *MELBOURNE, 100)

    def test_profile_without_coordinates_never_matches(self):
        profile = make_profile(1, latitude=SYDNEY[0])

        assert not within_radius(profile, *SYDNEY, 20000)

    def test_mobile_toggle(self):
        profile = make_profile(
            1,
            location_type=LocationType.MOBILE,
            latitude=SYDNEY[0],
            longitude=SYDNEY[1],
        )

        assert within_radius(profile, *SYDNEY, 1, include_mobile=True)
        assert not within_radius(profile, *SYDNEY, 1, include_mobile=False)


class TestSortProfiles:
    def _profiles(self):
        return [
            make_profile(3, rating=4.0, review_count=2),
            make_profile(1, rating=None, review_count=0),
            make_profile(2, rating=4.0, review_count=5),
            make_profile(4, rating=5.0, review_count=1),
        ]

    def test_default_is_creation_order(self):
        result = sort_profiles(self._profiles(), ProfileSort.DEFAULT)
        assert [p.id for p in result] == [1, 2, 3, 4]

    def test_rating_high_breaks_ties_by_id(self):
        result = sort_profiles(self._profiles(), ProfileSort.RATING_HIGH)
        assert [p.id for p in result] == [4, 2, 3, 1]

    def test_rating_low_treats_missing_as_zero(self):
        result = sort_profiles(self._profiles(), ProfileSort.RATING_LOW)
        assert [p.id for p in result] == [1, 2, 3, 4]

    def test_reviews_high(self):
        result = sort_profiles(self._profiles(), ProfileSort.REVIEWS_HIGH)
        assert [p.id for p in result] == [2, 3, 4, 1]

    def test_reviews_low(self):
        result = sort_profiles(self._profiles(), ProfileSort.REVIEWS_LOW)
        assert [p.id for p in result] == [1, 4, 3, 2]


class TestListProfiles:
    @pytest.mark.asyncio
    async def test_bundles_services_in_one_batch(
        self, service: DirectoryService, uow: FakeUnitOfWork
    ):
        provider = make_profile(2, role=ProfileRole.PROVIDER)
        client = make_profile(1)
        uow.profiles.search.return_value = [provider, client]
        uow.services.list_for_providers_batch.return_value = {
            2: [Service(id=7, provider_id=2, name="Lashes")]
        }

        result = await service.list_profiles()

        assert [r.profile.id for r in result] == [1, 2]
        assert result[0].services == []
        assert [s.name for s in result[1].services] == ["Lashes"]
        uow.services.list_for_providers_batch.assert_called_once_with([1, 2])

    @pytest.mark.asyncio
    async def test_radius_applies_only_with_all_three_values(
        self, service: DirectoryService, uow: FakeUnitOfWork
    ):
        near = make_profile(1, latitude=SYDNEY[0], longitude=SYDNEY[1])
        far = make_profile(2, latitude=MELBOURNE[0], longitude=MELBOURNE[1])
        uow.profiles.search.return_value = [near, far]
        uow.services.list_for_providers_batch.return_value = {}

        partial = await service.list_profiles(ProfileFilter(lat=SYDNEY[0], lng=SYDNEY[1]))
        full = await service.list_profiles(
            ProfileFilter(lat=SYDNEY[0], lng=SYDNEY[1], radius=50)
        )

        assert [r.profile.id for r in partial] == [1, 2]
        assert [r.profile.id for r in full] == [1]

    @pytest.mark.asyncio
    async def test_passes_criteria_to_store(self, service: DirectoryService, uow: FakeUnitOfWork):
        uow.profiles.search.return_value = []
        uow.services.list_for_providers_batch.return_value = {}
        criteria = ProfileFilter(services=("Lashes",), location_types=(LocationType.STUDIO,))

        assert await service.list_profiles(criteria) == []
        uow.profiles.search.assert_called_once_with(criteria)


class TestProfileDetail:
    @pytest.mark.asyncio
    async def test_missing_profile_is_not_found(
        self, service: DirectoryService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get_profile_detail(42)

    @pytest.mark.asyncio
    async def test_collects_services_and_reviews(
        self, service: DirectoryService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = make_profile(2, role=ProfileRole.PROVIDER)
        uow.services.list_for_provider.return_value = []
        uow.reviews.list_for_provider.return_value = []

        detail = await service.get_profile_detail(2)

        assert detail.profile.id == 2
        uow.reviews.list_for_provider.assert_called_once_with(2)
