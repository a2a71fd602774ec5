"""Point-shop purchases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from officing.db.models import ShopItem, Title, UserProgress
from officing.events import publish_title_unlocks
from officing.gamification.ledger import get_or_create_progress, get_ticket_balance, grant_tickets
from officing.gamification.titles import has_title, unlock_title
from officing.outcomes import Rejection

logger = logging.getLogger(__name__)


@dataclass
class PurchaseOutcome:
    rejection: Rejection | None = None
    item: ShopItem | None = None
    points_remaining: int = 0
    tickets_remaining: int = 0


async def list_shop_items(db: AsyncSession) -> list[ShopItem]:
    result = await db.execute(
        select(ShopItem)
        .where(ShopItem.is_available.is_(True))
        .order_by(ShopItem.sort_order, ShopItem.id)
    )
    return list(result.scalars().all())


async def purchase_item(
    db: AsyncSession,
    redis: object,
    user_id: str,
    item_id: int,
    now: datetime | None = None,
) -> PurchaseOutcome:
    """Spend points on a shop item and deliver it in the same transaction."""
    if now is None:
        now = datetime.now(timezone.utc)

    item = (
        await db.execute(select(ShopItem).where(ShopItem.id == item_id, ShopItem.is_available.is_(True)))
    ).scalar_one_or_none()
    if item is None:
        return PurchaseOutcome(rejection=Rejection.ITEM_NOT_FOUND)

    item_value = item.item_value or {}
    title: Title | None = None
    if item.item_type == "title":
        title_id = item_value.get("title_id")
        title = await db.get(Title, title_id) if title_id else None
        if title is None:
            logger.warning("Shop item %s points at missing title %r", item.id, title_id)
            return PurchaseOutcome(rejection=Rejection.ITEM_NOT_FOUND)
        if await has_title(db, user_id, title.id):
            return PurchaseOutcome(rejection=Rejection.TITLE_ALREADY_OWNED)

    await get_or_create_progress(db, user_id, now)
    table = UserProgress.__table__
    result = await db.execute(
        update(table)
        .where(table.c.user_id == user_id, table.c.total_points >= item.cost)
        .values(total_points=table.c.total_points - item.cost, updated_at=now)
    )
    if result.rowcount == 0:
        await db.rollback()
        return PurchaseOutcome(rejection=Rejection.INSUFFICIENT_POINTS)

    if item.item_type == "lottery_ticket":
        await grant_tickets(db, user_id, int(item_value.get("count") or 1), "shop_purchase", now)
    elif title is not None:
        if not await unlock_title(db, user_id, title.id, now):
            # Unlocked by a concurrent request between the check and the insert.
            await db.rollback()
            return PurchaseOutcome(rejection=Rejection.TITLE_ALREADY_OWNED)
    # stamp and item purchases carry no backend state

    points_remaining = (
        await db.execute(select(UserProgress.total_points).where(UserProgress.user_id == user_id))
    ).scalar_one()
    tickets_remaining = await get_ticket_balance(db, user_id)
    await db.commit()
    logger.info("User %s bought shop item %s for %d points", user_id, item.id, item.cost)

    if title is not None:
        await publish_title_unlocks(redis, user_id, [title])

    return PurchaseOutcome(
        item=item,
        points_remaining=points_remaining,
        tickets_remaining=tickets_remaining,
    )
