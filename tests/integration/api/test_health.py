"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for the liveness endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "Marketplace Directory API"
        assert data["version"] == "1.0.0"
        assert data["database"] is None

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        data = (await client.get("/health")).json()

        for key in ("status", "service", "version", "timestamp", "environment"):
            assert key in data


class TestDetailedHealthEndpoint:
    """Tests for the readiness endpoint."""

    @pytest.mark.asyncio
    async def test_reports_database_status(self, client: AsyncClient) -> None:
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-ID": "probe-1"})

        assert response.headers["x-request-id"] == "probe-1"
