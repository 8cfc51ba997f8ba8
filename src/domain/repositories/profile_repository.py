"""Profile repository protocol."""

from typing import Protocol

from domain.entities.admin import LocationTypeCount
from domain.entities.profile import Profile, ProfileFilter, ProfileRole


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: int) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_many(self, ids: list[int]) -> dict[int, Profile]:
        """Get several profiles keyed by ID (missing IDs are omitted)."""
        ...

    async def get_by_identity(self, identity_id: str) -> Profile | None:
        """Get the profile owned by an external identity."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username, ignoring case."""
        ...

    async def search(self, criteria: ProfileFilter | None = None) -> list[Profile]:
        """List profiles in creation order, applying store-side criteria.

        Services, location types and text search are evaluated by the store;
        the radius criterion is left to the caller.
        """
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a profile. Raises DuplicateEntryError on a unique violation."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist changed fields. Raises DuplicateEntryError on a unique violation."""
        ...

    async def set_rating(self, id: int, rating: float | None, review_count: int) -> None:
        """Store the derived rating columns."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a profile row and return success status."""
        ...

    async def count(self, role: ProfileRole | None = None) -> int:
        """Count profiles, optionally for one role."""
        ...

    async def count_providers_by_location_type(self) -> list[LocationTypeCount]:
        """Count providers grouped by location type."""
        ...
