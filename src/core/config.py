"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Marketplace Directory API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Force JSON log output (defaults to JSON in production only)",
    )

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/directory",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Identity provider
    auth_jwks_url: str = Field(
        default="",
        description="JWKS endpoint of the identity provider (RS256/ES256 tokens)",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for JWT signing (used for HS256 fallback and tests)",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Directory policies
    username_cooldown_days: int = Field(
        default=7,
        description="Minimum number of days between two username changes",
    )
    radius_includes_mobile: bool = Field(
        default=True,
        description="Whether mobile providers with coordinates match radius searches",
    )
    admin_identity_ids: str = Field(
        default="",
        description="Comma-separated identity IDs whose profiles are created as admins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def admin_identity_id_set(self) -> frozenset[str]:
        """Parse admin identity IDs into a set."""
        return frozenset(i.strip() for i in self.admin_identity_ids.split(",") if i.strip())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers usually supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
