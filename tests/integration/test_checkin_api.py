"""Check-in endpoint."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.factories import add_titles


class TestCheckinEndpoint:

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/checkin", json={})
        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_first_checkin_shape(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/api/v1/checkin", json={"tag": "office", "timestamp": "2026-03-02T09:00:00Z"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["attendance"]["checkInDate"] == "2026-03-02"
        assert data["attendance"]["tag"] == "office"
        rewards = data["rewards"]
        assert rewards["ticketsEarned"] == 1
        assert rewards["xpEarned"] == 50
        assert rewards["pointsEarned"] == 10
        assert rewards["levelUp"] is False
        assert rewards["monthlyCount"] == 1
        assert rewards["streak"] == {"current": 1, "max": 1, "isNewRecord": True}
        assert data["newTitles"] == []

    @pytest.mark.asyncio
    async def test_empty_body_accepted(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/checkin")
        assert response.status_code == 200
        assert response.json()["attendance"]["tag"] == "office"

    @pytest.mark.asyncio
    async def test_blank_tag_uses_default(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/api/v1/checkin", json={"tag": "", "timestamp": "2026-03-02T09:00:00Z"}
        )
        assert response.status_code == 200
        assert response.json()["attendance"]["tag"] == "office"

    @pytest.mark.asyncio
    async def test_duplicate(self, authed_client: AsyncClient):
        body = {"timestamp": "2026-03-02T09:00:00Z"}
        await authed_client.post("/api/v1/checkin", json=body)
        response = await authed_client.post("/api/v1/checkin", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data == {"success": False, "error": "Already checked in today", "isDuplicate": True}

    @pytest.mark.asyncio
    async def test_new_titles_listed(self, authed_client: AsyncClient, db_session):
        await add_titles(db_session, ("First Day", "attendance", {"count": 1}))

        response = await authed_client.post("/api/v1/checkin", json={"timestamp": "2026-03-02T09:00:00Z"})

        titles = response.json()["newTitles"]
        assert [t["name"] for t in titles] == ["First Day"]
        assert titles[0]["unlockConditionType"] == "attendance"

    @pytest.mark.asyncio
    async def test_invalid_timestamp(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/checkin", json={"timestamp": "yesterday-ish"})
        assert response.status_code == 422
        assert response.json()["success"] is False
