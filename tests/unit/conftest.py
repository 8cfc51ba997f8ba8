"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.profile import LocationType, Profile, ProfileRole


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.services = AsyncMock()
        self.reviews = AsyncMock()
        self.messages = AsyncMock()
        self.notifications = AsyncMock()
        self.page_visits = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


def make_profile(
    id: int,
    username: str | None = None,
    role: ProfileRole = ProfileRole.CLIENT,
    **fields: Any,
) -> Profile:
    """Build a Profile entity with sensible defaults."""
    return Profile(
        id=id,
        identity_id=f"identity-{id}",
        username=username or f"user{id}",
        role=role,
        **fields,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def client_profile() -> Profile:
    """A client profile."""
    return make_profile(1, "clara")


@pytest.fixture
def provider_profile() -> Profile:
    """A provider profile in a Sydney studio."""
    return make_profile(
        2,
        "amy_lashes",
        role=ProfileRole.PROVIDER,
        location="Sydney CBD",
        location_type=LocationType.STUDIO,
        latitude=-33.87,
        longitude=151.21,
    )
