"""JWT authentication provider implementation.

Supports tokens issued by an external identity provider (RS256/ES256,
verified against its JWKS endpoint) and locally-created tokens (HS256,
used by tests and local development).

Only the ``sub`` claim is required; it becomes the profile's identity_id.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
import structlog
from jose import JWTError, jwk, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

ASYMMETRIC_ALGORITHMS = frozenset({"RS256", "ES256"})

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(jwks_url: str) -> dict[str, Any]:
    """Fetch and cache JWKS keys keyed by ``kid``."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
    except httpx.HTTPError:
        logger.exception("jwks_fetch_failed", jwks_url=jwks_url)
        return {}

    _jwks_cache = {k["kid"]: k for k in jwks_data.get("keys", []) if k.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


def reset_jwks_cache() -> None:
    """Forget fetched keys so the next validation refetches them."""
    global _jwks_cache
    _jwks_cache = None


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.auth_jwks_url,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the identity.

        The signing algorithm is read from the token header: RS256/ES256
        tokens are checked against the JWKS public key named by ``kid``,
        anything else against the shared secret.

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg in ASYMMETRIC_ALGORITHMS:
                payload = await self._validate_with_jwks(token, header, alg)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        identity_id = payload.get("sub")
        if not identity_id:
            return None

        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            user_metadata.get("display_name")
            or user_metadata.get("name")
            or payload.get("name")
        )

        return TokenUser(
            id=str(identity_id),
            email=payload.get("email"),
            display_name=display_name,
        )

    async def _validate_with_jwks(
        self, token: str, header: dict, alg: str
    ) -> Optional[dict]:
        """Validate an asymmetrically signed JWT using the JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys(self._jwks_url)).get(kid)
        if not key_data:
            # Unknown kid: the provider may have rotated its keys
            reset_jwks_cache()
            key_data = (await _get_jwks_keys(self._jwks_url)).get(kid)
            if not key_data:
                logger.warning("jwks_key_not_found", kid=kid)
                return None

        public_key = jwk.construct(key_data, algorithm=alg)
        return jwt.decode(
            token,
            public_key,
            algorithms=[alg],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT for an identity (HS256, used for tests).

        Args:
            user: The identity to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": user.id,
            "exp": expire,
        }
        if user.email:
            payload["email"] = user.email
        if user.display_name:
            payload["user_metadata"] = {"display_name": user.display_name}

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
