"""Lottery draw transaction.

Ticket consumption, prize selection, stock decrement, reward, pity update and
audit log commit together. A rejection after the ticket was taken rolls the
whole session back, so the user keeps the ticket.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from officing.config import get_settings
from officing.db.models import LotteryLog, Prize, Title, UserProgress
from officing.events import CHANNEL_LOTTERY_DRAW, publish_event, publish_title_unlocks
from officing.gamification.ledger import consume_ticket, get_or_create_progress
from officing.gamification.titles import get_title_by_name, unlock_title
from officing.lottery.selection import eligible_pool, next_pity_counter, pick_weighted
from officing.outcomes import Rejection, WriteConflictError

logger = logging.getLogger(__name__)


@dataclass
class LotteryDrawOutcome:
    rejection: Rejection | None = None
    prize: Prize | None = None
    pity_counter: int = 0
    tickets_remaining: int = 0
    unlocked_title: Title | None = None


async def list_available_prizes(db: AsyncSession) -> list[Prize]:
    """Prizes that can currently be drawn, in stable id order."""
    result = await db.execute(
        select(Prize)
        .where(
            Prize.is_available.is_(True),
            or_(Prize.stock.is_(None), Prize.stock > 0),
        )
        .order_by(Prize.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _decrement_stock(db: AsyncSession, prize: Prize) -> None:
    """Take one unit of a finite prize; the last unit also marks it unavailable."""
    table = Prize.__table__
    result = await db.execute(
        update(table)
        .where(table.c.id == prize.id, table.c.stock > 0)
        .values(stock=table.c.stock - 1, is_available=table.c.stock > 1)
    )
    if result.rowcount == 0:
        msg = f"prize {prize.id} ran out of stock during the draw"
        raise WriteConflictError(msg)
    await db.refresh(prize)
    if not prize.is_available:
        logger.info("Prize %s (%s) is out of stock", prize.id, prize.name)


async def _apply_prize(
    db: AsyncSession,
    user_id: str,
    prize: Prize,
    progress: UserProgress,
    now: datetime,
) -> Title | None:
    """Apply the prize's backend effect. Returns a title if one was newly unlocked."""
    reward_value = prize.reward_value or {}
    if prize.reward_type == "points":
        amount = int(reward_value.get("amount") or 0)
        if amount > 0:
            progress.total_points += amount
    elif prize.reward_type == "title":
        title_name = reward_value.get("title_name")
        if title_name:
            title = await get_title_by_name(db, title_name)
            if title is None:
                logger.warning("Prize %s references unknown title %r", prize.id, title_name)
            elif await unlock_title(db, user_id, title.id, now):
                return title
    # stamp and item prizes are presentation-only
    return None


async def draw_lottery(
    db: AsyncSession,
    redis: object,
    user_id: str,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> LotteryDrawOutcome:
    """Spend one ticket on a weighted, pity-aware prize draw."""
    settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)
    if rng is None:
        rng = random.Random()  # noqa: S311

    tickets_remaining = await consume_ticket(db, user_id, now)
    if tickets_remaining is None:
        await db.rollback()
        return LotteryDrawOutcome(rejection=Rejection.INSUFFICIENT_TICKETS)

    progress, _ = await get_or_create_progress(db, user_id, now)
    pity_at_draw = progress.pity_counter

    available = await list_available_prizes(db)
    if not available:
        await db.rollback()
        logger.warning("Lottery draw for user %s found no available prizes", user_id)
        return LotteryDrawOutcome(rejection=Rejection.NO_PRIZES_AVAILABLE)

    pool, pity_applied = eligible_pool(available, pity_at_draw, settings.pity_threshold)
    if pity_applied:
        logger.info("Pity pool applied for user %s at counter %d", user_id, pity_at_draw)

    prize = pick_weighted(pool, rng)

    if prize.stock is not None:
        await _decrement_stock(db, prize)

    unlocked_title = await _apply_prize(db, user_id, prize, progress, now)

    progress.pity_counter = next_pity_counter(prize.rank, pity_at_draw)
    progress.updated_at = now

    db.add(LotteryLog(
        user_id=user_id,
        prize_id=prize.id,
        rank=prize.rank,
        pity_counter_at_draw=pity_at_draw,
        created_at=now,
    ))

    await db.commit()
    logger.info(
        "User %s drew prize %s (rank %s), pity %d -> %d",
        user_id, prize.id, prize.rank, pity_at_draw, progress.pity_counter,
    )

    await publish_event(redis, CHANNEL_LOTTERY_DRAW, {
        "user_id": user_id,
        "prize_id": prize.id,
        "rank": prize.rank,
    })
    if unlocked_title is not None:
        await publish_title_unlocks(redis, user_id, [unlocked_title])

    return LotteryDrawOutcome(
        prize=prize,
        pity_counter=progress.pity_counter,
        tickets_remaining=tickets_remaining,
        unlocked_title=unlocked_title,
    )
