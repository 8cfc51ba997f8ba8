"""Message repository protocol."""

from typing import Protocol

from domain.entities.message import Message


class IMessageRepository(Protocol):
    """Repository interface for Message entities."""

    async def get(self, id: int) -> Message | None:
        """Get a message by ID."""
        ...

    async def list_between(self, profile_id: int, other_id: int) -> list[Message]:
        """Get the full history between two profiles, oldest first."""
        ...

    async def list_latest_per_counterpart(self, profile_id: int) -> list[Message]:
        """Get the most recent message for each counterpart, newest first."""
        ...

    async def create(self, message: Message) -> Message:
        """Create a new message."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a message and return success status."""
        ...

    async def delete_between(self, profile_id: int, other_id: int) -> int:
        """Delete every message between two profiles. Returns count deleted."""
        ...

    async def delete_involving(self, profile_id: int) -> int:
        """Delete messages sent or received by a profile. Returns count deleted."""
        ...

    async def count(self) -> int:
        """Count all messages."""
        ...
