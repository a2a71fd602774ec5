"""Request/response models for the check-in endpoint."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, field_validator

from officing.schemas import CamelModel, TitleResponse


class CheckinRequest(CamelModel):
    tag: str | None = Field(default=None, max_length=64)
    timestamp: datetime | None = None

    @field_validator("tag", mode="before")
    @classmethod
    def blank_tag_means_default(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AttendanceResponse(CamelModel):
    id: int
    check_in_date: date
    check_in_time: datetime
    tag: str


class StreakResponse(CamelModel):
    current: int
    max: int
    is_new_record: bool


class CheckinRewardsResponse(CamelModel):
    tickets_earned: int
    xp_earned: int
    points_earned: int
    level_up: bool
    new_level: int | None = None
    monthly_count: int
    streak: StreakResponse


class CheckinResponse(CamelModel):
    success: bool = True
    attendance: AttendanceResponse
    rewards: CheckinRewardsResponse
    new_titles: list[TitleResponse] = []
