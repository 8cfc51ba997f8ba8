"""Review repository protocol."""

from typing import Protocol

from domain.entities.review import RatingSummary, Review


class IReviewRepository(Protocol):
    """Repository interface for Review entities."""

    async def get(self, id: int) -> Review | None:
        """Get a review by ID."""
        ...

    async def get_by_client_and_provider(self, client_id: int, provider_id: int) -> Review | None:
        """Get the review a client left for a provider, if any."""
        ...

    async def list_for_provider(self, provider_id: int) -> list[Review]:
        """Get all reviews of a provider, newest first."""
        ...

    async def list_provider_ids_reviewed_by(self, client_id: int) -> list[int]:
        """Get the providers a client has reviewed."""
        ...

    async def get_rating_summary(self, provider_id: int) -> RatingSummary:
        """Average rating and review count for a provider."""
        ...

    async def create(self, review: Review) -> Review:
        """Create a review. Raises DuplicateEntryError on a unique violation."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a review and return success status."""
        ...

    async def delete_involving(self, profile_id: int) -> int:
        """Delete reviews written by or about a profile. Returns count deleted."""
        ...
