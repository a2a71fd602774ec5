"""Catalog seeding."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from officing.db.models import Prize, Quest, ShopItem, Title
from officing.gamification.seed import (
    PRIZE_SEED_DATA,
    QUEST_SEED_DATA,
    SHOP_SEED_DATA,
    TITLE_SEED_DATA,
    seed_catalogs,
)


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestSeedCatalogs:

    @pytest.mark.asyncio
    async def test_fills_empty_catalogs(self, db_session):
        seeded = await seed_catalogs(db_session)

        assert seeded == {
            "titles": len(TITLE_SEED_DATA),
            "quests": len(QUEST_SEED_DATA),
            "prizes": len(PRIZE_SEED_DATA),
            "shop_items": len(SHOP_SEED_DATA),
        }
        assert await _count(db_session, Title) == len(TITLE_SEED_DATA)
        assert await _count(db_session, Quest) == len(QUEST_SEED_DATA)

    @pytest.mark.asyncio
    async def test_idempotent(self, db_session):
        await seed_catalogs(db_session)
        second = await seed_catalogs(db_session)

        assert second["quests"] == second["prizes"] == second["shop_items"] == 0
        assert await _count(db_session, Title) == len(TITLE_SEED_DATA)
        assert await _count(db_session, Prize) == len(PRIZE_SEED_DATA)
        assert await _count(db_session, ShopItem) == len(SHOP_SEED_DATA)

    @pytest.mark.asyncio
    async def test_shop_title_item_points_at_title(self, db_session):
        await seed_catalogs(db_session)

        item = (await db_session.execute(select(ShopItem).where(ShopItem.item_type == "title"))).scalar_one()
        title = await db_session.get(Title, item.item_value["title_id"])
        assert title.name == "Big Spender"

    def test_catalogs_cover_every_rank_and_condition(self):
        assert {p["rank"] for p in PRIZE_SEED_DATA} == {"S", "A", "B", "C"}
        assert any(p["stock"] is not None for p in PRIZE_SEED_DATA)
        conditions = {t["unlock_condition_type"] for t in TITLE_SEED_DATA}
        assert {"streak", "attendance", "level", "quest", "tag"} <= conditions
        assert len(QUEST_SEED_DATA) >= 3
