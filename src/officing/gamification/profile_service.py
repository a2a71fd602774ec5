"""Read models and settings for the user's own progress and title collection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from officing.checkin.service import count_monthly_attendance, find_attendance
from officing.clock import local_day
from officing.config import get_settings
from officing.db.models import Title, UserTitle
from officing.gamification.ledger import get_or_create_progress, get_progress, get_ticket_balance
from officing.gamification.leveling import xp_required_for_level
from officing.gamification.titles import has_title
from officing.outcomes import Rejection


@dataclass
class TitleStatus:
    title: Title
    unlocked_at: datetime | None
    is_active: bool


@dataclass
class ProgressSummary:
    level: int
    current_xp: int
    xp_for_next_level: int
    total_points: int
    current_streak: int
    max_streak: int
    pity_counter: int
    ticket_count: int
    active_title: Title | None
    monthly_count: int
    checked_in_today: bool


async def list_titles(db: AsyncSession, user_id: str) -> list[TitleStatus]:
    """The whole catalog, annotated with the user's unlocks and active title."""
    catalog = (await db.execute(select(Title).order_by(Title.sort_order, Title.id))).scalars().all()
    unlocked = dict(
        (
            await db.execute(
                select(UserTitle.title_id, UserTitle.unlocked_at).where(UserTitle.user_id == user_id)
            )
        ).all()
    )
    progress = await get_progress(db, user_id)
    active_id = progress.active_title_id if progress else None

    return [
        TitleStatus(title=t, unlocked_at=unlocked.get(t.id), is_active=t.id == active_id)
        for t in catalog
    ]


async def set_active_title(
    db: AsyncSession,
    user_id: str,
    title_id: int | None,
    now: datetime | None = None,
) -> Rejection | None:
    """Display an unlocked title, or clear it with None."""
    if now is None:
        now = datetime.now(timezone.utc)
    if title_id is not None and not await has_title(db, user_id, title_id):
        return Rejection.TITLE_NOT_UNLOCKED

    progress, _ = await get_or_create_progress(db, user_id, now)
    progress.active_title_id = title_id
    progress.updated_at = now
    await db.commit()
    return None


async def get_progress_summary(
    db: AsyncSession,
    user_id: str,
    now: datetime | None = None,
) -> ProgressSummary:
    """Dashboard snapshot. Viewing never creates rows."""
    settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)
    today = local_day(now, settings.checkin_timezone)

    progress = await get_progress(db, user_id)
    active_title = None
    if progress is not None and progress.active_title_id is not None:
        active_title = await db.get(Title, progress.active_title_id)

    monthly_count = await count_monthly_attendance(db, user_id, today.year, today.month)
    checked_in_today = await find_attendance(db, user_id, today) is not None

    level = progress.level if progress else 1
    return ProgressSummary(
        level=level,
        current_xp=progress.current_xp if progress else 0,
        xp_for_next_level=xp_required_for_level(level + 1),
        total_points=progress.total_points if progress else 0,
        current_streak=progress.current_streak if progress else 0,
        max_streak=progress.max_streak if progress else 0,
        pity_counter=progress.pity_counter if progress else 0,
        ticket_count=await get_ticket_balance(db, user_id),
        active_title=active_title,
        monthly_count=monthly_count,
        checked_in_today=checked_in_today,
    )
