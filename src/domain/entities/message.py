"""Message domain entities.

A conversation is never stored: it is the set of messages whose unordered
participant pair matches, grouped at query time.
"""

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities.profile import Profile


@dataclass
class Message:
    """Domain entity for a direct message between two profiles."""

    sender_id: int
    receiver_id: int
    content: str
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def conversation_key(self) -> tuple[int, int]:
        """Unordered participant pair, normalised as (min, max)."""
        return (
            min(self.sender_id, self.receiver_id),
            max(self.sender_id, self.receiver_id),
        )

    def involves(self, profile_id: int) -> bool:
        return profile_id in (self.sender_id, self.receiver_id)

    def counterpart_of(self, profile_id: int) -> int:
        return self.receiver_id if self.sender_id == profile_id else self.sender_id


@dataclass(frozen=True, slots=True)
class Conversation:
    """Read-only value object: latest message exchanged with one counterpart."""

    other_profile: Profile | None
    other_profile_id: int
    last_message: Message
