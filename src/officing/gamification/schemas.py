"""Response models for titles and progress."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from officing.schemas import CamelModel, TitleResponse


class TitleStatusResponse(TitleResponse):
    unlocked: bool
    unlocked_at: datetime | None = None
    is_active: bool = False


class TitleListResponse(CamelModel):
    titles: list[TitleStatusResponse]


class SetActiveTitleRequest(CamelModel):
    title_id: int | None = None


class SetActiveTitleResponse(CamelModel):
    success: bool = True
    active_title_id: int | None = None


class ProgressResponse(CamelModel):
    level: int
    current_xp: int = Field(alias="currentXP")
    xp_for_next_level: int
    total_points: int
    current_streak: int
    max_streak: int
    pity_counter: int
    ticket_count: int
    active_title: TitleResponse | None = None
    monthly_count: int
    checked_in_today: bool
