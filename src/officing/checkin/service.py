"""Check-in transaction: attendance, streak, base rewards, milestone tickets, titles.

Idle -> Validating -> Recording -> Rewarding -> Completed | Rejected.
The (user_id, check_in_date) unique constraint is the idempotency boundary;
a retried or concurrent duplicate lands in Rejected without any reward.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from officing.clock import local_day
from officing.config import get_settings
from officing.db.models import Attendance, Title
from officing.db.upsert import insert_for
from officing.events import CHANNEL_LEVEL_UP, publish_event, publish_title_unlocks
from officing.gamification.ledger import apply_rewards, get_or_create_progress, grant_tickets
from officing.gamification.streak import StreakResult, compute_streak
from officing.gamification.titles import CHECKIN_CONDITIONS, UserStats, evaluate_title_unlocks
from officing.outcomes import Rejection

logger = logging.getLogger(__name__)


@dataclass
class CheckinRewards:
    tickets_earned: int
    xp_earned: int
    points_earned: int
    level_up: bool
    new_level: int | None
    monthly_count: int
    streak: StreakResult


@dataclass
class CheckinOutcome:
    rejection: Rejection | None = None
    attendance: Attendance | None = None
    rewards: CheckinRewards | None = None
    new_titles: list[Title] = field(default_factory=list)


def milestone_bonus(monthly_count: int, milestones: list[int]) -> int:
    """Bonus tickets for hitting a milestone exactly, so each fires once per month."""
    return sum(1 for milestone in milestones if monthly_count == milestone)


async def find_attendance(db: AsyncSession, user_id: str, day: date) -> Attendance | None:
    result = await db.execute(
        select(Attendance).where(
            Attendance.user_id == user_id,
            Attendance.check_in_date == day,
        )
    )
    return result.scalar_one_or_none()


async def count_monthly_attendance(db: AsyncSession, user_id: str, year: int, month: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Attendance).where(
            Attendance.user_id == user_id,
            Attendance.year == year,
            Attendance.month == month,
        )
    )
    return result.scalar_one()


async def _count_attendance(db: AsyncSession, user_id: str, tag: str | None = None) -> int:
    stmt = select(func.count()).select_from(Attendance).where(Attendance.user_id == user_id)
    if tag is not None:
        stmt = stmt.where(Attendance.tag == tag)
    return (await db.execute(stmt)).scalar_one()


async def check_in(
    db: AsyncSession,
    redis: object,
    user_id: str,
    tag: str | None = None,
    timestamp: datetime | None = None,
    now: datetime | None = None,
) -> CheckinOutcome:
    """Record today's attendance and grant every check-in reward in one transaction."""
    settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)
    if timestamp is None:
        timestamp = now
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    tag = tag or settings.default_checkin_tag
    day = local_day(timestamp, settings.checkin_timezone)

    # --- Validating ---
    if await find_attendance(db, user_id, day) is not None:
        logger.info("Duplicate check-in for user %s on %s", user_id, day)
        return CheckinOutcome(rejection=Rejection.DUPLICATE_CHECKIN)

    # --- Recording ---
    stmt = insert_for(db, Attendance.__table__).values(
        user_id=user_id,
        check_in_date=day,
        check_in_time=timestamp,
        tag=tag,
        year=day.year,
        month=day.month,
    ).on_conflict_do_nothing(index_elements=["user_id", "check_in_date"])
    result = await db.execute(stmt)
    if result.rowcount == 0:
        # Lost the race against a concurrent check-in for the same day.
        await db.rollback()
        logger.info("Concurrent duplicate check-in for user %s on %s", user_id, day)
        return CheckinOutcome(rejection=Rejection.DUPLICATE_CHECKIN)
    attendance = await find_attendance(db, user_id, day)

    # --- Rewarding ---
    monthly_count = await count_monthly_attendance(db, user_id, day.year, day.month)

    progress, created = await get_or_create_progress(db, user_id, now)
    checked_in_yesterday = await find_attendance(db, user_id, day - timedelta(days=1)) is not None
    streak = compute_streak(
        progress.current_streak,
        progress.max_streak,
        checked_in_yesterday,
        first_checkin=created,
    )
    progress.current_streak = streak.current
    progress.max_streak = streak.max

    level_result = await apply_rewards(
        db, user_id, settings.checkin_base_xp, settings.checkin_base_points, now
    )

    bonus = milestone_bonus(monthly_count, settings.monthly_ticket_milestones)
    tickets_earned = settings.checkin_base_tickets + bonus
    source = f"{monthly_count}_checkins" if bonus else "checkin"
    await grant_tickets(db, user_id, tickets_earned, source, now)

    stats = UserStats(
        level=level_result.level,
        current_streak=streak.current,
        total_attendance=await _count_attendance(db, user_id),
        tag_counts={tag: await _count_attendance(db, user_id, tag)},
    )
    new_titles = await evaluate_title_unlocks(db, user_id, stats, CHECKIN_CONDITIONS, now)

    await db.commit()

    if level_result.leveled_up:
        await publish_event(redis, CHANNEL_LEVEL_UP, {
            "user_id": user_id,
            "old_level": level_result.level - level_result.levels_gained,
            "new_level": level_result.level,
        })
    await publish_title_unlocks(redis, user_id, new_titles)

    return CheckinOutcome(
        attendance=attendance,
        rewards=CheckinRewards(
            tickets_earned=tickets_earned,
            xp_earned=settings.checkin_base_xp,
            points_earned=settings.checkin_base_points,
            level_up=level_result.leveled_up,
            new_level=level_result.level if level_result.leveled_up else None,
            monthly_count=monthly_count,
            streak=streak,
        ),
        new_titles=new_titles,
    )
