"""Title collection and progress endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.factories import add_titles


class TestTitleEndpoints:

    @pytest.mark.asyncio
    async def test_titles_after_checkin(self, authed_client: AsyncClient, db_session):
        await add_titles(
            db_session,
            ("First Day", "attendance", {"count": 1}),
            ("Regular", "attendance", {"count": 20}),
        )
        await authed_client.post("/api/v1/checkin")

        response = await authed_client.get("/api/v1/titles")

        assert response.status_code == 200
        titles = response.json()["titles"]
        assert [(t["name"], t["unlocked"]) for t in titles] == [("First Day", True), ("Regular", False)]
        assert titles[0]["unlockedAt"] is not None

    @pytest.mark.asyncio
    async def test_set_active_title(self, authed_client: AsyncClient, db_session):
        first, locked = await add_titles(
            db_session,
            ("First Day", "attendance", {"count": 1}),
            ("Regular", "attendance", {"count": 20}),
        )
        await authed_client.post("/api/v1/checkin")

        ok = await authed_client.put("/api/v1/users/me/title", json={"titleId": first.id})
        assert ok.status_code == 200
        assert ok.json() == {"success": True, "activeTitleId": first.id}

        denied = await authed_client.put("/api/v1/users/me/title", json={"titleId": locked.id})
        assert denied.status_code == 403
        assert denied.json()["error"] == "Title not unlocked"

        progress = (await authed_client.get("/api/v1/users/me/progress")).json()
        assert progress["activeTitle"]["name"] == "First Day"

        cleared = await authed_client.put("/api/v1/users/me/title", json={"titleId": None})
        assert cleared.json()["activeTitleId"] is None


class TestProgressEndpoint:

    @pytest.mark.asyncio
    async def test_fresh_user(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/v1/users/me/progress")

        assert response.status_code == 200
        data = response.json()
        assert data["level"] == 1
        assert data["currentXP"] == 0
        assert data["xpForNextLevel"] == 282
        assert data["ticketCount"] == 0
        assert data["checkedInToday"] is False

    @pytest.mark.asyncio
    async def test_after_checkin(self, authed_client: AsyncClient):
        await authed_client.post("/api/v1/checkin")

        data = (await authed_client.get("/api/v1/users/me/progress")).json()

        assert data["checkedInToday"] is True
        assert data["monthlyCount"] == 1
        assert data["totalPoints"] == 10
        assert data["currentStreak"] == 1
        assert data["ticketCount"] == 1
