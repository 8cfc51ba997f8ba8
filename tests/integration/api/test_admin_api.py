"""Integration tests for Admin API and visit tracking."""

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN_IDENTITY_ID


@pytest.fixture
async def admin(create_profile) -> dict:
    return await create_profile(ADMIN_IDENTITY_ID, "site_admin")


class TestAdminAccess:
    @pytest.mark.asyncio
    async def test_non_admin_is_forbidden(
        self, client: AsyncClient, create_profile, make_headers
    ) -> None:
        await create_profile("identity-clara", "clara")
        headers = make_headers("identity-clara")

        for path in ("/api/v1/admin/stats", "/api/v1/admin/profiles", "/api/v1/admin/page-visits"):
            response = await client.get(path, headers=headers)
            assert response.status_code == 403
            assert response.json()["error_code"] == "ADMIN_REQUIRED"

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthorized(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/admin/stats")

        assert response.status_code == 401


class TestAdminStats:
    @pytest.mark.asyncio
    async def test_stats(
        self, client: AsyncClient, admin: dict, create_profile, make_headers
    ) -> None:
        amy = await create_profile(
            "identity-amy", "amy_lashes", role="provider", location_type="studio"
        )
        await create_profile("identity-bo", "bo_brows", role="provider", location_type="studio")
        await create_profile("identity-cy", "cy_nails", role="provider", location_type="mobile")
        await client.post(
            "/api/v1/messages",
            json={"receiver_id": amy["id"], "content": "hi"},
            headers=make_headers(ADMIN_IDENTITY_ID),
        )

        response = await client.get(
            "/api/v1/admin/stats", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_users"] == 4
        assert data["total_providers"] == 3
        assert data["total_clients"] == 1
        assert data["messages_sent"] == 1
        assert data["providers_by_location_type"] == [
            {"location_type": "studio", "count": 2},
            {"location_type": "mobile", "count": 1},
        ]

    @pytest.mark.asyncio
    async def test_list_all_profiles(
        self, client: AsyncClient, admin: dict, create_profile, make_headers
    ) -> None:
        await create_profile("identity-clara", "clara")

        response = await client.get(
            "/api/v1/admin/profiles", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert [p["username"] for p in response.json()["data"]] == ["site_admin", "clara"]


class TestPageVisits:
    @pytest.mark.asyncio
    async def test_track_visit_is_public_and_counted(
        self, client: AsyncClient, admin: dict, make_headers
    ) -> None:
        for _ in range(3):
            response = await client.post("/api/v1/track-visit")
            assert response.status_code == 204

        response = await client.get(
            "/api/v1/admin/page-visits", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.json() == {"count": 3}

    @pytest.mark.asyncio
    async def test_track_visit_increments_seeded_counter(
        self, client: AsyncClient, admin: dict, session_factory, make_headers
    ) -> None:
        from infrastructure.database.models import PageVisitModel

        async with session_factory() as session:
            session.add(PageVisitModel(id=1, count=41))
            await session.commit()

        await client.post("/api/v1/track-visit")
        response = await client.get(
            "/api/v1/admin/page-visits", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.json() == {"count": 42}

    @pytest.mark.asyncio
    async def test_count_starts_at_zero(
        self, client: AsyncClient, admin: dict, make_headers
    ) -> None:
        response = await client.get(
            "/api/v1/admin/page-visits", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.json() == {"count": 0}


class TestAdminDeleteProfile:
    @pytest.mark.asyncio
    async def test_delete_provider_cascades(
        self, client: AsyncClient, admin: dict, create_profile, make_headers
    ) -> None:
        provider = await create_profile(
            "identity-p",
            "p_lashes",
            role="provider",
            location_type="studio",
            latitude=-33.87,
            longitude=151.21,
        )
        await create_profile("identity-c", "c_client")
        p_headers = make_headers("identity-p")
        c_headers = make_headers("identity-c")

        service = await client.post(
            "/api/v1/services", json={"name": "Lashes", "price": 80}, headers=p_headers
        )
        assert service.status_code == 201
        assert service.json()["data"]["price"] == 80.0

        first = await client.post(
            "/api/v1/reviews", json={"provider_id": provider["id"], "rating": 5}, headers=c_headers
        )
        second = await client.post(
            "/api/v1/reviews", json={"provider_id": provider["id"], "rating": 4}, headers=c_headers
        )
        assert first.status_code == 201
        assert second.status_code == 409

        sent = await client.post(
            "/api/v1/messages",
            json={"receiver_id": provider["id"], "content": "hi"},
            headers=c_headers,
        )
        assert sent.status_code == 201
        notifications = (
            await client.get("/api/v1/notifications", headers=p_headers)
        ).json()["data"]
        assert [n["type"] for n in notifications] == ["message"]

        admin_headers = make_headers(ADMIN_IDENTITY_ID)
        response = await client.delete(
            f"/api/v1/admin/profiles/{provider['id']}", headers=admin_headers
        )

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/profiles/{provider['id']}")).status_code == 404
        services = await client.get("/api/v1/services", params={"provider_id": provider["id"]})
        assert services.json()["data"] == []
        assert (await client.get("/api/v1/messages", headers=c_headers)).json()["data"] == []
        review_check = await client.get(
            f"/api/v1/reviews/check/{provider['id']}", headers=c_headers
        )
        assert review_check.json()["has_reviewed"] is False
        stats = (await client.get("/api/v1/admin/stats", headers=admin_headers)).json()["data"]
        assert stats["total_users"] == 2
        assert stats["messages_sent"] == 0
        # Identity may onboard again with a fresh profile
        again = await client.post(
            "/api/v1/profiles", json={"username": "p_again"}, headers=p_headers
        )
        assert again.status_code == 201
        assert again.json()["data"]["id"] != provider["id"]

    @pytest.mark.asyncio
    async def test_admin_profile_cannot_be_deleted(
        self, client: AsyncClient, admin: dict, make_headers
    ) -> None:
        response = await client.delete(
            f"/api/v1/admin/profiles/{admin['id']}", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "ADMIN_PROFILE_PROTECTED"

    @pytest.mark.asyncio
    async def test_delete_missing_profile(
        self, client: AsyncClient, admin: dict, make_headers
    ) -> None:
        response = await client.delete(
            "/api/v1/admin/profiles/999", headers=make_headers(ADMIN_IDENTITY_ID)
        )

        assert response.status_code == 404
