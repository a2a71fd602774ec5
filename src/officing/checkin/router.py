"""Check-in API endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from officing.auth.dependencies import CurrentUser, get_current_user
from officing.checkin.schemas import (
    AttendanceResponse,
    CheckinRequest,
    CheckinResponse,
    CheckinRewardsResponse,
    StreakResponse,
)
from officing.checkin.service import check_in
from officing.dependencies import get_db, get_redis_dep
from officing.outcomes import Rejection
from officing.schemas import TitleResponse, rejection_response

router = APIRouter(prefix="/api/v1", tags=["Check-in"])


@router.post("/checkin", response_model=CheckinResponse)
async def post_checkin(
    body: CheckinRequest | None = None,
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
) -> CheckinResponse | JSONResponse:
    """Record today's attendance and grant check-in rewards."""
    body = body or CheckinRequest()
    outcome = await check_in(db, redis, user.id, tag=body.tag, timestamp=body.timestamp)

    if outcome.rejection is not None:
        extra = {"isDuplicate": True} if outcome.rejection is Rejection.DUPLICATE_CHECKIN else {}
        return rejection_response(outcome.rejection, **extra)

    rewards = outcome.rewards
    return CheckinResponse(
        attendance=AttendanceResponse.model_validate(outcome.attendance),
        rewards=CheckinRewardsResponse(
            tickets_earned=rewards.tickets_earned,
            xp_earned=rewards.xp_earned,
            points_earned=rewards.points_earned,
            level_up=rewards.level_up,
            new_level=rewards.new_level,
            monthly_count=rewards.monthly_count,
            streak=StreakResponse(
                current=rewards.streak.current,
                max=rewards.streak.max,
                is_new_record=rewards.streak.is_new_record,
            ),
        ),
        new_titles=[TitleResponse.model_validate(t) for t in outcome.new_titles],
    )
