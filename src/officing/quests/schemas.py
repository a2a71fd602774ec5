"""Request/response models for quest endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from officing.schemas import CamelModel, TitleResponse


class QuestCompleteRequest(CamelModel):
    quest_log_id: int = Field(gt=0)


class QuestRewardsResponse(CamelModel):
    xp_earned: int
    points_earned: int
    level: int
    current_xp: int = Field(alias="currentXP")
    xp_for_next_level: int
    leveled_up: bool


class QuestCompleteResponse(CamelModel):
    success: bool = True
    rewards: QuestRewardsResponse
    new_titles: list[TitleResponse] = []


class QuestResponse(CamelModel):
    id: int
    title: str
    description: str
    rank: str
    base_xp: int
    base_points: int


class QuestLogResponse(CamelModel):
    id: int
    quest_id: int
    assigned_date: date
    completed_at: datetime | None = None
    xp_earned: int | None = None
    points_earned: int | None = None
    quest: QuestResponse


class QuestListResponse(CamelModel):
    success: bool = True
    quests: list[QuestLogResponse]
