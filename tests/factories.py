"""Tokens and catalog builders shared by the database and API tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from officing.config import get_settings
from officing.db.models import Prize, Quest, ShopItem, Title

TEST_USER_ID = "8d0c3f8e-5b7a-4a43-9a51-2f1f6b1c0a01"
OTHER_USER_ID = "1f9e2d4c-7a6b-4c3d-8e2f-0a1b2c3d4e5f"


def make_token(user_id: str = TEST_USER_ID, expires_in: int = 3600, **claims: Any) -> str:  # noqa: ANN401
    """Mint an identity-provider style access token signed with the configured secret."""
    settings = get_settings()
    payload = {
        "sub": user_id,
        "aud": settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "email": "tester@example.com",
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def add_titles(db: AsyncSession, *rows: tuple[str, str, dict[str, Any]]) -> list[Title]:
    """Insert titles given as (name, condition_type, condition_value)."""
    titles = [
        Title(
            name=name,
            description=f"{name} title",
            unlock_condition_type=ctype,
            unlock_condition_value=cvalue,
            sort_order=i,
        )
        for i, (name, ctype, cvalue) in enumerate(rows)
    ]
    db.add_all(titles)
    await db.commit()
    return titles


async def add_quests(db: AsyncSession, *rows: tuple[str, str, int, int]) -> list[Quest]:
    """Insert daily quests given as (title, rank, base_xp, base_points)."""
    quests = [
        Quest(title=title, description="", rank=rank, base_xp=xp, base_points=points, quest_type="daily")
        for title, rank, xp, points in rows
    ]
    db.add_all(quests)
    await db.commit()
    return quests


async def add_prizes(db: AsyncSession, *rows: dict[str, Any]) -> list[Prize]:
    """Insert prizes from keyword dicts; description and reward default to a stamp."""
    prizes = [
        Prize(**{"description": "", "reward_type": "stamp", "reward_value": {}, **row})
        for row in rows
    ]
    db.add_all(prizes)
    await db.commit()
    return prizes


async def add_shop_item(db: AsyncSession, **fields: Any) -> ShopItem:  # noqa: ANN401
    item = ShopItem(**{"description": "", "item_value": {}, **fields})
    db.add(item)
    await db.commit()
    return item
