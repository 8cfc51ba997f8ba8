"""Page visit counter repository protocol."""

from typing import Protocol


class IPageVisitRepository(Protocol):
    """Repository interface for the shared visit counter."""

    async def increment(self) -> None:
        """Atomically add one to the counter in the store."""
        ...

    async def get_count(self) -> int:
        """Current counter value (0 before the first visit)."""
        ...
