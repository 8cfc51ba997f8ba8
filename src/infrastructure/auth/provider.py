"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class TokenUser:
    """Represents an external identity extracted from an auth token.

    ``id`` is the identity provider's opaque subject; profiles link to it
    through ``identity_id``.
    """

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for an identity.

        Args:
            user: The identity to create a token for

        Returns:
            The generated token string
        """
        ...
