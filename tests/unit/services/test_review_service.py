"""Unit tests for ReviewService."""

import pytest

from core.exceptions import (
    AuthorizationError,
    DuplicateEntryError,
    DuplicateReviewError,
    ProfileNotFoundError,
    ReviewNotFoundError,
    SelfReviewError,
)
from domain.entities.profile import Profile
from domain.entities.review import RatingSummary, Review
from domain.services.review_service import ReviewService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ReviewService:
    return ReviewService(lambda: uow)


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_review_and_refreshes_rating(
        self, service: ReviewService, uow: FakeUnitOfWork, provider_profile: Profile
    ):
        uow.profiles.get.return_value = provider_profile
        uow.reviews.get_by_client_and_provider.return_value = None
        uow.reviews.create.side_effect = lambda r: Review(
            id=10, client_id=r.client_id, provider_id=r.provider_id, rating=r.rating
        )
        uow.reviews.get_rating_summary.return_value = RatingSummary(average=5.0, count=1)

        result = await service.create(client_id=1, provider_id=2, rating=5, text="Great")

        assert result.id == 10
        uow.profiles.set_rating.assert_called_once_with(2, 5.0, 1)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_rejects_self_review_before_touching_store(
        self, service: ReviewService, uow: FakeUnitOfWork
    ):
        with pytest.raises(SelfReviewError) as exc_info:
            await service.create(client_id=2, provider_id=2, rating=4)

        assert exc_info.value.status_code == 400
        uow.profiles.get.assert_not_called()
        uow.reviews.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_provider_raises_not_found(
        self, service: ReviewService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.create(client_id=1, provider_id=99, rating=3)

        uow.reviews.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_review_is_conflict(
        self, service: ReviewService, uow: FakeUnitOfWork, provider_profile: Profile
    ):
        uow.profiles.get.return_value = provider_profile
        uow.reviews.get_by_client_and_provider.return_value = Review(
            id=3, client_id=1, provider_id=2, rating=4
        )

        with pytest.raises(DuplicateReviewError) as exc_info:
            await service.create(client_id=1, provider_id=2, rating=5)

        assert exc_info.value.status_code == 409
        uow.reviews.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_store_unique_violation_maps_to_same_conflict(
        self, service: ReviewService, uow: FakeUnitOfWork, provider_profile: Profile
    ):
        uow.profiles.get.return_value = provider_profile
        uow.reviews.get_by_client_and_provider.return_value = None
        uow.reviews.create.side_effect = DuplicateEntryError("review", "UNIQUE constraint failed")

        with pytest.raises(DuplicateReviewError):
            await service.create(client_id=1, provider_id=2, rating=5)

        uow.profiles.set_rating.assert_not_called()
        assert uow.rolled_back


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_deletes_and_rating_is_recomputed(
        self, service: ReviewService, uow: FakeUnitOfWork
    ):
        uow.reviews.get.return_value = Review(id=3, client_id=1, provider_id=2, rating=4)
        uow.reviews.get_rating_summary.return_value = RatingSummary(average=None, count=0)

        await service.delete(requester_id=1, review_id=3)

        uow.reviews.delete.assert_called_once_with(3)
        uow.profiles.set_rating.assert_called_once_with(2, None, 0)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_review_is_not_found(self, service: ReviewService, uow: FakeUnitOfWork):
        uow.reviews.get.return_value = None

        with pytest.raises(ReviewNotFoundError):
            await service.delete(requester_id=1, review_id=3)

    @pytest.mark.asyncio
    async def test_other_profile_is_forbidden(self, service: ReviewService, uow: FakeUnitOfWork):
        uow.reviews.get.return_value = Review(id=3, client_id=1, provider_id=2, rating=4)

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(requester_id=2, review_id=3)

        assert exc_info.value.status_code == 403
        uow.reviews.delete.assert_not_called()


# --- has_reviewed ---


class TestHasReviewed:
    @pytest.mark.asyncio
    async def test_reports_existing_review(self, service: ReviewService, uow: FakeUnitOfWork):
        uow.reviews.get_by_client_and_provider.return_value = Review(
            id=7, client_id=1, provider_id=2, rating=5
        )

        result = await service.has_reviewed(1, 2)

        assert result.has_reviewed is True
        assert result.review_id == 7

    @pytest.mark.asyncio
    async def test_reports_no_review(self, service: ReviewService, uow: FakeUnitOfWork):
        uow.reviews.get_by_client_and_provider.return_value = None

        result = await service.has_reviewed(1, 2)

        assert result.has_reviewed is False
        assert result.review_id is None
        assert not uow.committed
