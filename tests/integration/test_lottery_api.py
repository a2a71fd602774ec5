"""Lottery and prize catalog endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from officing.gamification.ledger import grant_tickets
from tests.factories import TEST_USER_ID, add_prizes


class TestLotteryEndpoints:

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/lottery/draw")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_insufficient_tickets(self, authed_client: AsyncClient, db_session):
        await add_prizes(db_session, {"name": "Stamp", "rank": "C", "weight": 1.0})

        response = await authed_client.post("/api/v1/lottery/draw")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Insufficient tickets"}

    @pytest.mark.asyncio
    async def test_draw_shape(self, authed_client: AsyncClient, db_session, march_2nd):
        await add_prizes(db_session, {"name": "Stamp", "rank": "C", "weight": 1.0, "stock": 10})
        await grant_tickets(db_session, TEST_USER_ID, 2, "checkin", march_2nd)
        await db_session.commit()

        response = await authed_client.post("/api/v1/lottery/draw")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["rank"] == "C"
        assert data["prize"]["name"] == "Stamp"
        assert data["prize"]["rewardType"] == "stamp"
        assert data["prize"]["stock"] == 9
        assert data["pityCounter"] == 1
        assert data["ticketsRemaining"] == 1
        assert data["unlockedTitle"] is None

    @pytest.mark.asyncio
    async def test_unlimited_prize_reports_null_stock(self, authed_client: AsyncClient, db_session, march_2nd):
        await add_prizes(db_session, {"name": "Stamp", "rank": "C", "weight": 1.0})
        await grant_tickets(db_session, TEST_USER_ID, 1, "checkin", march_2nd)
        await db_session.commit()

        drawn = (await authed_client.post("/api/v1/lottery/draw")).json()["prize"]
        listed = (await authed_client.get("/api/v1/prizes")).json()["prizes"][0]

        assert drawn["stock"] is None
        assert drawn.keys() == listed.keys()

    @pytest.mark.asyncio
    async def test_no_prizes(self, authed_client: AsyncClient, db_session, march_2nd):
        await grant_tickets(db_session, TEST_USER_ID, 1, "checkin", march_2nd)
        await db_session.commit()

        response = await authed_client.post("/api/v1/lottery/draw")

        assert response.status_code == 409
        assert response.json()["error"] == "No available prizes"

    @pytest.mark.asyncio
    async def test_prize_catalog_is_public(self, client: AsyncClient, db_session):
        await add_prizes(
            db_session,
            {"name": "Shown", "rank": "A", "weight": 1.0},
            {"name": "Hidden", "rank": "A", "weight": 1.0, "is_available": False},
        )

        response = await client.get("/api/v1/prizes")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["prizes"]] == ["Shown"]
