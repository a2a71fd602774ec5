"""Quest API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from officing.auth.dependencies import CurrentUser, get_current_user
from officing.dependencies import get_db, get_redis_dep
from officing.quests.schemas import (
    QuestCompleteRequest,
    QuestCompleteResponse,
    QuestListResponse,
    QuestLogResponse,
    QuestRewardsResponse,
)
from officing.quests.service import assign_daily_quests, complete_quest, list_today_quests
from officing.schemas import TitleResponse, rejection_response

router = APIRouter(prefix="/api/v1/quests", tags=["Quests"])


@router.post("/complete", response_model=QuestCompleteResponse)
async def post_complete_quest(
    body: QuestCompleteRequest,
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
) -> QuestCompleteResponse | JSONResponse:
    """Complete one of the caller's assigned quests."""
    outcome = await complete_quest(db, redis, user.id, body.quest_log_id)
    if outcome.rejection is not None:
        return rejection_response(outcome.rejection)

    level = outcome.level
    return QuestCompleteResponse(
        rewards=QuestRewardsResponse(
            xp_earned=outcome.xp_earned,
            points_earned=outcome.points_earned,
            level=level.level,
            current_xp=level.current_xp,
            xp_for_next_level=level.xp_for_next_level,
            leveled_up=level.leveled_up,
        ),
        new_titles=[TitleResponse.model_validate(t) for t in outcome.new_titles],
    )


@router.post("/daily", response_model=QuestListResponse)
async def post_daily_quests(
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> QuestListResponse | JSONResponse:
    """Assign today's daily quests. Repeated calls return the same set."""
    outcome = await assign_daily_quests(db, user.id)
    if outcome.rejection is not None:
        return rejection_response(outcome.rejection)
    return QuestListResponse(quests=[QuestLogResponse.model_validate(log) for log in outcome.logs])


@router.get("/today", response_model=QuestListResponse)
async def get_today_quests(
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> QuestListResponse:
    """Quests assigned to the caller for today."""
    logs = await list_today_quests(db, user.id)
    return QuestListResponse(quests=[QuestLogResponse.model_validate(log) for log in logs])
