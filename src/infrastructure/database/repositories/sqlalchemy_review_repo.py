"""SQLAlchemy implementation of Review repository."""

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.review import RatingSummary, Review
from infrastructure.database.errors import unique_violation_guard
from infrastructure.database.models import ReviewModel


class SQLAlchemyReviewRepository:
    """SQLAlchemy implementation of IReviewRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Review | None:
        """Get a review by ID."""
        stmt = select(ReviewModel).where(ReviewModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_client_and_provider(self, client_id: int, provider_id: int) -> Review | None:
        """Get the review a client left for a provider."""
        stmt = select(ReviewModel).where(
            ReviewModel.client_id == client_id,
            ReviewModel.provider_id == provider_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_provider(self, provider_id: int) -> list[Review]:
        """Get all reviews of a provider, newest first."""
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.provider_id == provider_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_provider_ids_reviewed_by(self, client_id: int) -> list[int]:
        """Get the providers a client has reviewed."""
        stmt = select(ReviewModel.provider_id).where(ReviewModel.client_id == client_id)
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def get_rating_summary(self, provider_id: int) -> RatingSummary:
        """Average rating and review count for a provider."""
        stmt = select(
            func.avg(ReviewModel.rating).label("average"),
            func.count(ReviewModel.id).label("review_count"),
        ).where(ReviewModel.provider_id == provider_id)
        result = await self._session.execute(stmt)
        row = result.one()
        average = float(row.average) if row.average is not None else None
        return RatingSummary(average=average, count=row.review_count)

    async def create(self, review: Review) -> Review:
        """Create a new review."""
        model = self._to_model(review)
        async with unique_violation_guard("review"):
            self._session.add(model)
            await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a review."""
        stmt = select(ReviewModel).where(ReviewModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_involving(self, profile_id: int) -> int:
        """Delete reviews written by or about a profile. Returns count deleted."""
        stmt = (
            delete(ReviewModel)
            .where(
                or_(
                    ReviewModel.client_id == profile_id,
                    ReviewModel.provider_id == profile_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    def _to_entity(self, model: ReviewModel) -> Review:
        """Convert ORM model to domain entity."""
        return Review(
            id=model.id,
            client_id=model.client_id,
            provider_id=model.provider_id,
            rating=model.rating,
            text=model.text,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Review) -> ReviewModel:
        """Convert domain entity to ORM model."""
        return ReviewModel(
            id=entity.id,
            client_id=entity.client_id,
            provider_id=entity.provider_id,
            rating=entity.rating,
            text=entity.text,
            created_at=entity.created_at,
        )
