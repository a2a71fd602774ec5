"""Title unlock evaluation with duplicate-proof unlock markers.

Condition routing: each transaction only evaluates the condition types whose
signal it produces. Check-in owns streak, attendance and tag conditions;
quest completion owns quest-count conditions; both re-check level since both
grant XP. Lottery and shop title rewards call ``unlock_title`` directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from officing.db.models import Title, UserTitle
from officing.db.upsert import insert_for

logger = logging.getLogger(__name__)

CHECKIN_CONDITIONS = frozenset({"streak", "attendance", "level", "tag"})
QUEST_CONDITIONS = frozenset({"level", "quest"})


@dataclass
class UserStats:
    """Aggregates a title condition can be checked against."""

    level: int = 1
    current_streak: int = 0
    total_attendance: int = 0
    completed_quests: int = 0
    # Only the tag of the triggering check-in is counted.
    tag_counts: dict[str, int] = field(default_factory=dict)


def condition_met(condition_type: str, value: dict[str, Any], stats: UserStats) -> bool:
    """Check one title condition. Unknown types never unlock."""
    value = value or {}
    if condition_type == "streak":
        threshold = value.get("threshold")
        return bool(threshold) and stats.current_streak >= threshold
    if condition_type == "attendance":
        count = value.get("count")
        return bool(count) and stats.total_attendance >= count
    if condition_type == "level":
        required = value.get("level")
        return bool(required) and stats.level >= required
    if condition_type == "quest":
        count = value.get("count")
        return bool(count) and stats.completed_quests >= count
    if condition_type == "tag":
        tag = value.get("tag")
        count = value.get("count")
        if not tag or not count or tag not in stats.tag_counts:
            return False
        return stats.tag_counts[tag] >= count

    logger.debug("Skipping unknown title condition type %r", condition_type)
    return False


async def unlocked_title_ids(db: AsyncSession, user_id: str) -> set[int]:
    """IDs of every title the user already holds."""
    result = await db.execute(select(UserTitle.title_id).where(UserTitle.user_id == user_id))
    return set(result.scalars().all())


async def has_title(db: AsyncSession, user_id: str, title_id: int) -> bool:
    result = await db.execute(
        select(UserTitle.id).where(UserTitle.user_id == user_id, UserTitle.title_id == title_id)
    )
    return result.scalar_one_or_none() is not None


async def get_title_by_name(db: AsyncSession, name: str) -> Title | None:
    result = await db.execute(select(Title).where(Title.name == name))
    return result.scalar_one_or_none()


async def unlock_title(
    db: AsyncSession,
    user_id: str,
    title_id: int,
    now: datetime | None = None,
) -> bool:
    """Insert the unlock marker. Returns False if the user already held the title.

    The unique (user_id, title_id) constraint decides, so two concurrent
    unlocks of the same title produce exactly one row and one True.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    stmt = insert_for(db, UserTitle.__table__).values(
        user_id=user_id,
        title_id=title_id,
        unlocked_at=now,
    ).on_conflict_do_nothing(index_elements=["user_id", "title_id"])
    result = await db.execute(stmt)
    return result.rowcount == 1


async def evaluate_title_unlocks(
    db: AsyncSession,
    user_id: str,
    stats: UserStats,
    condition_types: frozenset[str],
    now: datetime | None = None,
) -> list[Title]:
    """Unlock every not-yet-held title whose routed condition is now met.

    Returns the newly unlocked titles in catalog order.
    """
    catalog = (
        await db.execute(
            select(Title)
            .where(Title.unlock_condition_type.in_(condition_types))
            .order_by(Title.sort_order, Title.id)
        )
    ).scalars().all()
    if not catalog:
        return []

    held = await unlocked_title_ids(db, user_id)
    newly_unlocked: list[Title] = []
    for title in catalog:
        if title.id in held:
            continue
        if not condition_met(title.unlock_condition_type, title.unlock_condition_value, stats):
            continue
        if await unlock_title(db, user_id, title.id, now):
            newly_unlocked.append(title)

    if newly_unlocked:
        logger.info("User %s unlocked titles: %s", user_id, [t.name for t in newly_unlocked])
    return newly_unlocked
