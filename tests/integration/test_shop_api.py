"""Point shop endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from officing.gamification.ledger import apply_rewards
from tests.factories import TEST_USER_ID, add_shop_item


class TestShopEndpoints:

    @pytest.mark.asyncio
    async def test_list_items(self, client: AsyncClient, db_session):
        await add_shop_item(db_session, name="Ticket", cost=100, item_type="lottery_ticket", item_value={"count": 1})

        response = await client.get("/api/v1/shop/items")

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["itemType"] == "lottery_ticket"
        assert item["itemValue"] == {"count": 1}

    @pytest.mark.asyncio
    async def test_purchase(self, authed_client: AsyncClient, db_session, march_2nd):
        item = await add_shop_item(db_session, name="Ticket", cost=100, item_type="lottery_ticket")
        await apply_rewards(db_session, TEST_USER_ID, 0, 150, march_2nd)
        await db_session.commit()

        response = await authed_client.post("/api/v1/shop/purchase", json={"itemId": item.id})

        assert response.status_code == 200
        data = response.json()
        assert data["pointsRemaining"] == 50
        assert data["ticketsRemaining"] == 1
        assert data["item"]["name"] == "Ticket"

    @pytest.mark.asyncio
    async def test_insufficient_points(self, authed_client: AsyncClient, db_session):
        item = await add_shop_item(db_session, name="Ticket", cost=100, item_type="lottery_ticket")

        response = await authed_client.post("/api/v1/shop/purchase", json={"itemId": item.id})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Insufficient points"}

    @pytest.mark.asyncio
    async def test_unknown_item(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/shop/purchase", json={"itemId": 404})
        assert response.status_code == 404
