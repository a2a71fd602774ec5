"""Reward ledger: XP/points on user_progress, tickets on lottery_tickets.

Nothing here commits. The calling transaction owns the session and commits
once, so a failed write anywhere leaves no partial grant behind.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from officing.db.models import LotteryTicket, UserProgress
from officing.db.upsert import insert_for
from officing.gamification.leveling import LevelResult, apply_xp

logger = logging.getLogger(__name__)


async def get_or_create_progress(
    db: AsyncSession,
    user_id: str,
    now: datetime | None = None,
) -> tuple[UserProgress, bool]:
    """Return the user's progress row locked for update, creating it if absent.

    Returns (progress, created).
    """
    if now is None:
        now = datetime.now(timezone.utc)

    stmt = insert_for(db, UserProgress.__table__).values(
        user_id=user_id,
        level=1,
        current_xp=0,
        total_points=0,
        current_streak=0,
        max_streak=0,
        pity_counter=0,
        created_at=now,
        updated_at=now,
    ).on_conflict_do_nothing(index_elements=["user_id"])
    result = await db.execute(stmt)
    created = result.rowcount == 1

    progress = (
        await db.execute(
            select(UserProgress)
            .where(UserProgress.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
    ).scalar_one()
    return progress, created


async def get_progress(db: AsyncSession, user_id: str) -> UserProgress | None:
    """Read-only lookup; never creates a row."""
    result = await db.execute(select(UserProgress).where(UserProgress.user_id == user_id))
    return result.scalar_one_or_none()


async def apply_rewards(
    db: AsyncSession,
    user_id: str,
    xp: int,
    points: int,
    now: datetime | None = None,
) -> LevelResult:
    """Add XP (with level rollover) and points to the user's progress."""
    if now is None:
        now = datetime.now(timezone.utc)
    if points < 0:
        msg = "points must be non-negative"
        raise ValueError(msg)

    progress, _ = await get_or_create_progress(db, user_id, now)
    level_result = apply_xp(progress.level, progress.current_xp, xp)

    progress.level = level_result.level
    progress.current_xp = level_result.current_xp
    progress.total_points += points
    progress.updated_at = now
    await db.flush()

    if level_result.leveled_up:
        logger.info(
            "User %s leveled up %d -> %d",
            user_id, level_result.level - level_result.levels_gained, level_result.level,
        )
    return level_result


async def grant_tickets(
    db: AsyncSession,
    user_id: str,
    count: int,
    source: str,
    now: datetime | None = None,
) -> int:
    """Add tickets to the user's balance (creating it if absent). Returns the new balance."""
    if now is None:
        now = datetime.now(timezone.utc)
    if count < 0:
        msg = "ticket count must be non-negative"
        raise ValueError(msg)

    table = LotteryTicket.__table__
    stmt = insert_for(db, table).values(
        user_id=user_id,
        ticket_count=count,
        earned_from=source,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id"],
        set_={
            "ticket_count": table.c.ticket_count + stmt.excluded.ticket_count,
            "earned_from": stmt.excluded.earned_from,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)
    return await get_ticket_balance(db, user_id)


async def consume_ticket(db: AsyncSession, user_id: str, now: datetime | None = None) -> int | None:
    """Take one ticket if the balance is positive.

    Returns the remaining balance, or None when there was nothing to take.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    table = LotteryTicket.__table__
    result = await db.execute(
        update(table)
        .where(table.c.user_id == user_id, table.c.ticket_count > 0)
        .values(ticket_count=table.c.ticket_count - 1, updated_at=now)
    )
    if result.rowcount == 0:
        return None
    return await get_ticket_balance(db, user_id)


async def get_ticket_balance(db: AsyncSession, user_id: str) -> int:
    """Current ticket count, 0 when the user never received a ticket."""
    result = await db.execute(
        select(LotteryTicket.ticket_count).where(LotteryTicket.user_id == user_id)
    )
    balance = result.scalar_one_or_none()
    return balance or 0
