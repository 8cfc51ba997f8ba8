"""Review service layer: uniqueness and self-review rules."""

from collections.abc import Callable

import structlog

from core.exceptions import (
    AuthorizationError,
    DuplicateEntryError,
    DuplicateReviewError,
    ErrorCode,
    ProfileNotFoundError,
    ReviewNotFoundError,
    SelfReviewError,
)
from domain.entities.review import Review, ReviewCheck
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


async def refresh_provider_rating(uow: IUnitOfWork, provider_id: int) -> None:
    """Recompute a provider's derived rating and review count in the current transaction."""
    summary = await uow.reviews.get_rating_summary(provider_id)
    await uow.profiles.set_rating(provider_id, summary.average, summary.count)


class ReviewService:
    """Service layer for Review business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_for_provider(self, provider_id: int) -> list[Review]:
        """Get all reviews of a provider, newest first."""
        async with self._uow_factory() as uow:
            return await uow.reviews.list_for_provider(provider_id)

    async def has_reviewed(self, client_id: int, provider_id: int) -> ReviewCheck:
        """Read-only check so callers can disable re-submission."""
        async with self._uow_factory() as uow:
            existing = await uow.reviews.get_by_client_and_provider(client_id, provider_id)
            return ReviewCheck(
                has_reviewed=existing is not None,
                review_id=existing.id if existing else None,
            )

    async def create(
        self,
        client_id: int,
        provider_id: int,
        rating: int,
        text: str | None = None,
    ) -> Review:
        """Create a review.

        The pre-check gives a friendly error on the common path; the store's
        unique constraint decides between two concurrent writers.

        Raises:
            SelfReviewError: client and provider are the same profile.
            ProfileNotFoundError: the provider does not exist.
            DuplicateReviewError: the client already reviewed this provider.
        """
        if client_id == provider_id:
            raise SelfReviewError()

        async with self._uow_factory() as uow:
            provider = await uow.profiles.get(provider_id)
            if not provider:
                raise ProfileNotFoundError(provider_id)

            existing = await uow.reviews.get_by_client_and_provider(client_id, provider_id)
            if existing:
                raise DuplicateReviewError(provider_id)

            review = Review(
                client_id=client_id,
                provider_id=provider_id,
                rating=rating,
                text=text,
            )
            try:
                created = await uow.reviews.create(review)
            except DuplicateEntryError as exc:
                logger.info(
                    "review_create_race_lost",
                    client_id=client_id,
                    provider_id=provider_id,
                )
                raise DuplicateReviewError(provider_id) from exc

            await refresh_provider_rating(uow, provider_id)
            await uow.commit()
            return created

    async def delete(self, requester_id: int, review_id: int) -> None:
        """Delete a review. Only its author may do so."""
        async with self._uow_factory() as uow:
            review = await uow.reviews.get(review_id)
            if not review:
                raise ReviewNotFoundError(review_id)
            if review.client_id != requester_id:
                raise AuthorizationError(
                    "You can only delete your own reviews",
                    ErrorCode.NOT_OWNER,
                )

            await uow.reviews.delete(review_id)
            await refresh_provider_rating(uow, review.provider_id)
            await uow.commit()
