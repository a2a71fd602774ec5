"""Quest completion transaction and daily quest assignment."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from officing.clock import local_day
from officing.config import get_settings
from officing.db.models import Quest, Title, UserQuestLog
from officing.db.upsert import insert_for
from officing.events import CHANNEL_LEVEL_UP, publish_event, publish_title_unlocks
from officing.gamification.ledger import apply_rewards
from officing.gamification.leveling import LevelResult
from officing.gamification.titles import QUEST_CONDITIONS, UserStats, evaluate_title_unlocks
from officing.outcomes import Rejection

logger = logging.getLogger(__name__)

RANK_MULTIPLIERS: dict[str, float] = {
    "S": 3.0,
    "A": 2.0,
    "B": 1.5,
    "C": 1.0,
}


def quest_reward(rank: str, base_xp: int, base_points: int) -> tuple[int, int]:
    """Rank-scaled (xp, points). Unknown ranks earn the base amounts."""
    multiplier = RANK_MULTIPLIERS.get(rank, 1.0)
    return math.floor(base_xp * multiplier), math.floor(base_points * multiplier)


@dataclass
class QuestCompletionOutcome:
    rejection: Rejection | None = None
    xp_earned: int = 0
    points_earned: int = 0
    level: LevelResult | None = None
    new_titles: list[Title] = field(default_factory=list)


@dataclass
class DailyQuestsOutcome:
    rejection: Rejection | None = None
    logs: list[UserQuestLog] = field(default_factory=list)
    created: bool = False


async def get_quest_log(db: AsyncSession, user_id: str, quest_log_id: int) -> UserQuestLog | None:
    """Quest log scoped to its owner; another user's log is indistinguishable from a missing one."""
    result = await db.execute(
        select(UserQuestLog).where(
            UserQuestLog.id == quest_log_id,
            UserQuestLog.user_id == user_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def count_completed_quests(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(UserQuestLog).where(
            UserQuestLog.user_id == user_id,
            UserQuestLog.completed_at.is_not(None),
        )
    )
    return result.scalar_one()


async def complete_quest(
    db: AsyncSession,
    redis: object,
    user_id: str,
    quest_log_id: int,
    now: datetime | None = None,
) -> QuestCompletionOutcome:
    """Mark a quest log completed and grant its rank-scaled reward exactly once."""
    if now is None:
        now = datetime.now(timezone.utc)

    quest_log = await get_quest_log(db, user_id, quest_log_id)
    if quest_log is None:
        return QuestCompletionOutcome(rejection=Rejection.QUEST_NOT_FOUND)
    if quest_log.completed_at is not None:
        return QuestCompletionOutcome(rejection=Rejection.QUEST_ALREADY_COMPLETED)

    quest = quest_log.quest
    xp_earned, points_earned = quest_reward(quest.rank, quest.base_xp, quest.base_points)

    table = UserQuestLog.__table__
    result = await db.execute(
        update(table)
        .where(
            table.c.id == quest_log_id,
            table.c.user_id == user_id,
            table.c.completed_at.is_(None),
        )
        .values(completed_at=now, xp_earned=xp_earned, points_earned=points_earned)
    )
    if result.rowcount == 0:
        await db.rollback()
        logger.info("Quest log %s completed concurrently for user %s", quest_log_id, user_id)
        return QuestCompletionOutcome(rejection=Rejection.QUEST_ALREADY_COMPLETED)

    level_result = await apply_rewards(db, user_id, xp_earned, points_earned, now)

    stats = UserStats(
        level=level_result.level,
        completed_quests=await count_completed_quests(db, user_id),
    )
    new_titles = await evaluate_title_unlocks(db, user_id, stats, QUEST_CONDITIONS, now)

    await db.commit()
    logger.info(
        "User %s completed quest log %s (%s rank): +%d XP, +%d points",
        user_id, quest_log_id, quest.rank, xp_earned, points_earned,
    )

    if level_result.leveled_up:
        await publish_event(redis, CHANNEL_LEVEL_UP, {
            "user_id": user_id,
            "old_level": level_result.level - level_result.levels_gained,
            "new_level": level_result.level,
        })
    await publish_title_unlocks(redis, user_id, new_titles)

    return QuestCompletionOutcome(
        xp_earned=xp_earned,
        points_earned=points_earned,
        level=level_result,
        new_titles=new_titles,
    )


async def list_quests_for_day(db: AsyncSession, user_id: str, day: date) -> list[UserQuestLog]:
    result = await db.execute(
        select(UserQuestLog)
        .where(UserQuestLog.user_id == user_id, UserQuestLog.assigned_date == day)
        .order_by(UserQuestLog.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def assign_daily_quests(
    db: AsyncSession,
    user_id: str,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> DailyQuestsOutcome:
    """Give the user today's random set of daily quests, once per day."""
    settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)
    if rng is None:
        rng = random.Random()  # noqa: S311
    today = local_day(now, settings.checkin_timezone)

    existing = await list_quests_for_day(db, user_id, today)
    if existing:
        return DailyQuestsOutcome(logs=existing)

    pool = (
        await db.execute(
            select(Quest)
            .where(Quest.quest_type == "daily", Quest.is_active.is_(True))
            .order_by(Quest.id)
        )
    ).scalars().all()
    if len(pool) < settings.daily_quest_count:
        logger.warning(
            "Daily quest pool has %d quests, need %d", len(pool), settings.daily_quest_count
        )
        return DailyQuestsOutcome(rejection=Rejection.NOT_ENOUGH_DAILY_QUESTS)

    selected = rng.sample(list(pool), settings.daily_quest_count)
    stmt = insert_for(db, UserQuestLog.__table__).values([
        {"user_id": user_id, "quest_id": quest.id, "assigned_date": today}
        for quest in selected
    ]).on_conflict_do_nothing(index_elements=["user_id", "quest_id", "assigned_date"])
    await db.execute(stmt)
    await db.commit()

    return DailyQuestsOutcome(logs=await list_quests_for_day(db, user_id, today), created=True)


async def list_today_quests(
    db: AsyncSession,
    user_id: str,
    now: datetime | None = None,
) -> list[UserQuestLog]:
    """Today's assigned quests with their quest definitions."""
    if now is None:
        now = datetime.now(timezone.utc)
    return await list_quests_for_day(db, user_id, local_day(now, get_settings().checkin_timezone))
