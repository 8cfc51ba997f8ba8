"""SQLAlchemy implementation of Profile repository."""

from sqlalchemy import exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.admin import LocationTypeCount
from domain.entities.profile import LocationType, Profile, ProfileFilter, ProfileRole
from infrastructure.database.errors import unique_violation_guard
from infrastructure.database.models import ProfileModel, ServiceModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[int]) -> dict[int, Profile]:
        """Get several profiles in a single query."""
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(set(ids)))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def get_by_identity(self, identity_id: str) -> Profile | None:
        """Get the profile owned by an external identity."""
        stmt = select(ProfileModel).where(ProfileModel.identity_id == identity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username, ignoring case."""
        stmt = select(ProfileModel).where(
            func.lower(ProfileModel.username) == username.lower()
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def search(self, criteria: ProfileFilter | None = None) -> list[Profile]:
        """List profiles in creation order matching the store-side criteria."""
        stmt = select(ProfileModel)

        if criteria is not None:
            if criteria.services:
                wanted = [name.strip().lower() for name in criteria.services]
                stmt = stmt.where(
                    exists().where(
                        ServiceModel.provider_id == ProfileModel.id,
                        func.lower(ServiceModel.name).in_(wanted),
                    )
                )

            if criteria.location_types:
                stmt = stmt.where(
                    ProfileModel.location_type.in_([lt.value for lt in criteria.location_types])
                )

            if criteria.search:
                term = criteria.search.strip()
                stmt = stmt.where(
                    or_(
                        ProfileModel.username.icontains(term, autoescape=True),
                        ProfileModel.location.icontains(term, autoescape=True),
                    )
                )

        stmt = stmt.order_by(ProfileModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        async with unique_violation_guard("profile"):
            self._session.add(model)
            await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile's mutable columns."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.username = profile.username
        model.username_changed_at = profile.username_changed_at
        model.bio = profile.bio
        model.location = profile.location
        model.location_type = profile.location_type.value if profile.location_type else None
        model.latitude = profile.latitude
        model.longitude = profile.longitude
        model.profile_image_url = profile.profile_image_url

        async with unique_violation_guard("profile"):
            await self._session.flush()
        return self._to_entity(model)

    async def set_rating(self, id: int, rating: float | None, review_count: int) -> None:
        """Store the derived rating columns."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == id)
            .values(rating=rating, review_count=review_count)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    async def delete(self, id: int) -> bool:
        """Delete a profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def count(self, role: ProfileRole | None = None) -> int:
        """Count profiles, optionally for one role."""
        stmt = select(func.count(ProfileModel.id))
        if role is not None:
            stmt = stmt.where(ProfileModel.role == role.value)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_providers_by_location_type(self) -> list[LocationTypeCount]:
        """Count providers grouped by location type, largest group first."""
        stmt = (
            select(
                ProfileModel.location_type,
                func.count(ProfileModel.id).label("provider_count"),
            )
            .where(
                ProfileModel.role == ProfileRole.PROVIDER.value,
                ProfileModel.location_type.is_not(None),
            )
            .group_by(ProfileModel.location_type)
            .order_by(func.count(ProfileModel.id).desc(), ProfileModel.location_type)
        )
        result = await self._session.execute(stmt)
        return [
            LocationTypeCount(location_type=row.location_type, count=row.provider_count)
            for row in result
        ]

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            identity_id=model.identity_id,
            username=model.username,
            role=ProfileRole(model.role),
            bio=model.bio,
            location=model.location,
            location_type=LocationType(model.location_type) if model.location_type else None,
            latitude=model.latitude,
            longitude=model.longitude,
            profile_image_url=model.profile_image_url,
            rating=model.rating,
            review_count=model.review_count or 0,
            username_changed_at=model.username_changed_at,
            is_admin=model.is_admin,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            identity_id=entity.identity_id,
            username=entity.username,
            role=entity.role.value,
            bio=entity.bio,
            location=entity.location,
            location_type=entity.location_type.value if entity.location_type else None,
            latitude=entity.latitude,
            longitude=entity.longitude,
            profile_image_url=entity.profile_image_url,
            rating=entity.rating,
            review_count=entity.review_count,
            username_changed_at=entity.username_changed_at,
            is_admin=entity.is_admin,
            created_at=entity.created_at,
        )
