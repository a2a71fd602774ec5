"""Catalog seed data: titles, daily quests, lottery prizes and shop items."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from officing.db.models import Prize, Quest, ShopItem, Title
from officing.db.upsert import insert_for

logger = logging.getLogger(__name__)

TITLE_SEED_DATA: list[dict[str, Any]] = [
    # Attendance
    {
        "name": "First Day",
        "description": "Check in at the office for the first time",
        "unlock_condition_type": "attendance",
        "unlock_condition_value": {"count": 1},
        "sort_order": 1,
    },
    {
        "name": "Regular",
        "description": "Check in on 20 different days",
        "unlock_condition_type": "attendance",
        "unlock_condition_value": {"count": 20},
        "sort_order": 2,
    },
    {
        "name": "Office Veteran",
        "description": "Check in on 100 different days",
        "unlock_condition_type": "attendance",
        "unlock_condition_value": {"count": 100},
        "sort_order": 3,
    },
    # Streaks
    {
        "name": "On a Roll",
        "description": "Check in 3 days in a row",
        "unlock_condition_type": "streak",
        "unlock_condition_value": {"threshold": 3},
        "sort_order": 10,
    },
    {
        "name": "Unstoppable",
        "description": "Check in 10 days in a row",
        "unlock_condition_type": "streak",
        "unlock_condition_value": {"threshold": 10},
        "sort_order": 11,
    },
    # Levels
    {
        "name": "Rising Star",
        "description": "Reach level 5",
        "unlock_condition_type": "level",
        "unlock_condition_value": {"level": 5},
        "sort_order": 20,
    },
    {
        "name": "Office Legend",
        "description": "Reach level 20",
        "unlock_condition_type": "level",
        "unlock_condition_value": {"level": 20},
        "sort_order": 21,
    },
    # Quests
    {
        "name": "Quest Starter",
        "description": "Complete your first quest",
        "unlock_condition_type": "quest",
        "unlock_condition_value": {"count": 1},
        "sort_order": 30,
    },
    {
        "name": "Quest Master",
        "description": "Complete 50 quests",
        "unlock_condition_type": "quest",
        "unlock_condition_value": {"count": 50},
        "sort_order": 31,
    },
    # Location tags
    {
        "name": "Cafe Nomad",
        "description": "Check in from the cafe space 5 times",
        "unlock_condition_type": "tag",
        "unlock_condition_value": {"tag": "cafe", "count": 5},
        "sort_order": 40,
    },
    {
        "name": "Home Base",
        "description": "Check in from home 10 times",
        "unlock_condition_type": "tag",
        "unlock_condition_value": {"tag": "home", "count": 10},
        "sort_order": 41,
    },
    # Lottery and shop rewards
    {
        "name": "Lucky Star",
        "description": "Drawn from the lottery",
        "unlock_condition_type": "lottery",
        "unlock_condition_value": {},
        "sort_order": 50,
    },
    {
        "name": "Big Spender",
        "description": "Bought from the point shop",
        "unlock_condition_type": "shop",
        "unlock_condition_value": {},
        "sort_order": 51,
    },
]

QUEST_SEED_DATA: list[dict[str, Any]] = [
    {"title": "Morning Greeting", "description": "Say good morning to three colleagues", "rank": "C", "base_xp": 20, "base_points": 5},
    {"title": "Clean Desk", "description": "Tidy up your desk before leaving", "rank": "C", "base_xp": 20, "base_points": 5},
    {"title": "Stretch Break", "description": "Take a five minute stretch break", "rank": "C", "base_xp": 15, "base_points": 5},
    {"title": "Lunch Together", "description": "Have lunch with someone from another team", "rank": "B", "base_xp": 30, "base_points": 10},
    {"title": "Share a Tip", "description": "Share a useful tip in the team channel", "rank": "B", "base_xp": 30, "base_points": 10},
    {"title": "Help a Colleague", "description": "Help a colleague finish a task", "rank": "A", "base_xp": 40, "base_points": 15},
    {"title": "Inbox Zero", "description": "Clear your inbox by end of day", "rank": "A", "base_xp": 40, "base_points": 15},
    {"title": "Run a Workshop", "description": "Host a short knowledge-sharing session", "rank": "S", "base_xp": 60, "base_points": 20},
]

PRIZE_SEED_DATA: list[dict[str, Any]] = [
    {
        "name": "Lunch Voucher",
        "description": "Free lunch at the office cafeteria",
        "rank": "S",
        "weight": 1.0,
        "reward_type": "item",
        "reward_value": {"item": "lunch_voucher"},
        "stock": 5,
    },
    {
        "name": "Lucky Star Title",
        "description": "A rare title only found in the lottery",
        "rank": "S",
        "weight": 1.0,
        "reward_type": "title",
        "reward_value": {"title_name": "Lucky Star"},
        "stock": None,
    },
    {
        "name": "Point Jackpot",
        "description": "200 bonus points",
        "rank": "A",
        "weight": 4.0,
        "reward_type": "points",
        "reward_value": {"amount": 200},
        "stock": None,
    },
    {
        "name": "Premium Coffee",
        "description": "A drink from the coffee bar",
        "rank": "A",
        "weight": 4.0,
        "reward_type": "item",
        "reward_value": {"item": "coffee"},
        "stock": 30,
    },
    {
        "name": "Point Bundle",
        "description": "50 bonus points",
        "rank": "B",
        "weight": 15.0,
        "reward_type": "points",
        "reward_value": {"amount": 50},
        "stock": None,
    },
    {
        "name": "Gold Stamp",
        "description": "A shiny stamp for your card",
        "rank": "B",
        "weight": 15.0,
        "reward_type": "stamp",
        "reward_value": {"stamp": "gold"},
        "stock": None,
    },
    {
        "name": "Point Handful",
        "description": "10 bonus points",
        "rank": "C",
        "weight": 30.0,
        "reward_type": "points",
        "reward_value": {"amount": 10},
        "stock": None,
    },
    {
        "name": "Paper Stamp",
        "description": "A plain stamp for your card",
        "rank": "C",
        "weight": 30.0,
        "reward_type": "stamp",
        "reward_value": {"stamp": "paper"},
        "stock": None,
    },
]

SHOP_SEED_DATA: list[dict[str, Any]] = [
    {
        "name": "Lottery Ticket",
        "description": "One extra lottery ticket",
        "cost": 100,
        "item_type": "lottery_ticket",
        "item_value": {"count": 1},
        "sort_order": 1,
    },
    {
        "name": "Lottery Ticket x3",
        "description": "Three extra lottery tickets",
        "cost": 270,
        "item_type": "lottery_ticket",
        "item_value": {"count": 3},
        "sort_order": 2,
    },
    {
        "name": "Big Spender Title",
        "description": "Show everyone where your points went",
        "cost": 1000,
        "item_type": "title",
        "item_value": {"title_name": "Big Spender"},
        "sort_order": 3,
    },
    {
        "name": "Sakura Stamp",
        "description": "A seasonal stamp design",
        "cost": 50,
        "item_type": "stamp",
        "item_value": {"stamp": "sakura"},
        "sort_order": 4,
    },
]


async def seed_titles(db: AsyncSession) -> int:
    """Upsert title definitions by name."""
    for title_data in TITLE_SEED_DATA:
        stmt = insert_for(db, Title.__table__).values(**title_data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                "description": stmt.excluded.description,
                "unlock_condition_type": stmt.excluded.unlock_condition_type,
                "unlock_condition_value": stmt.excluded.unlock_condition_value,
                "sort_order": stmt.excluded.sort_order,
            },
        )
        await db.execute(stmt)
    return len(TITLE_SEED_DATA)


async def _is_empty(db: AsyncSession, model: type) -> bool:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one() == 0


async def seed_catalogs(db: AsyncSession) -> dict[str, int]:
    """Seed every catalog. Titles are upserted; the other catalogs are only
    filled when empty so operator edits survive restarts.

    Returns the number of rows written per catalog.
    """
    seeded = {"titles": await seed_titles(db), "quests": 0, "prizes": 0, "shop_items": 0}

    if await _is_empty(db, Quest):
        db.add_all(Quest(quest_type="daily", **q) for q in QUEST_SEED_DATA)
        seeded["quests"] = len(QUEST_SEED_DATA)

    if await _is_empty(db, Prize):
        db.add_all(Prize(**p) for p in PRIZE_SEED_DATA)
        seeded["prizes"] = len(PRIZE_SEED_DATA)

    if await _is_empty(db, ShopItem):
        titles_by_name = dict((await db.execute(select(Title.name, Title.id))).all())
        for item_data in SHOP_SEED_DATA:
            item_value = dict(item_data["item_value"])
            if item_data["item_type"] == "title":
                item_value = {"title_id": titles_by_name[item_value.pop("title_name")]}
            db.add(ShopItem(**{**item_data, "item_value": item_value}))
        seeded["shop_items"] = len(SHOP_SEED_DATA)

    await db.commit()
    logger.info("Seeded catalogs: %s", seeded)
    return seeded
