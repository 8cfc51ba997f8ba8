"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_IDENTITY_ID = "admin-identity"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, shared across sessions via StaticPool."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]) -> Callable[[], Any]:
    """Unit of Work factory bound to the test database."""
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        jwks_url="",
    )


@pytest.fixture
def make_headers(auth_provider: JWTAuthProvider) -> Callable[[str], dict[str, str]]:
    """Build Authorization headers carrying a real token for an identity."""

    def _make(identity_id: str) -> dict[str, str]:
        token = auth_provider.create_token(TokenUser(id=identity_id))
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], Any],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Validates real HS256 tokens signed by the test auth provider
    - Overrides every service factory to use the test Unit of Work
    - Treats ADMIN_IDENTITY_ID as the admin identity
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_admin_service,
        get_catalog_service,
        get_directory_service,
        get_messaging_service,
        get_notification_service,
        get_profile_service,
        get_review_service,
    )
    from domain.services.admin_service import AdminService
    from domain.services.catalog_service import CatalogService
    from domain.services.directory_service import DirectoryService
    from domain.services.messaging_service import MessagingService
    from domain.services.notification_service import NotificationService
    from domain.services.profile_service import ProfileService
    from domain.services.review_service import ReviewService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    notification_service = NotificationService(uow_factory)
    profile_service = ProfileService(
        uow_factory,
        admin_identity_ids=frozenset({ADMIN_IDENTITY_ID}),
    )

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_notification_service] = lambda: notification_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_directory_service] = lambda: DirectoryService(uow_factory)
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(uow_factory)
    app.dependency_overrides[get_review_service] = lambda: ReviewService(uow_factory)
    app.dependency_overrides[get_messaging_service] = lambda: MessagingService(
        uow_factory, notification_service=notification_service
    )
    app.dependency_overrides[get_admin_service] = lambda: AdminService(
        uow_factory, profile_service=profile_service
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def create_profile(
    client: AsyncClient,
    make_headers: Callable[[str], dict[str, str]],
) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Onboard an identity through the API and return the created profile."""

    async def _create(identity_id: str, username: str, **fields: Any) -> dict[str, Any]:
        response = await client.post(
            "/api/v1/profiles",
            json={"username": username, **fields},
            headers=make_headers(identity_id),
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
