"""Title collection and progress endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from officing.auth.dependencies import CurrentUser, get_current_user
from officing.dependencies import get_db
from officing.gamification.profile_service import get_progress_summary, list_titles, set_active_title
from officing.gamification.schemas import (
    ProgressResponse,
    SetActiveTitleRequest,
    SetActiveTitleResponse,
    TitleListResponse,
    TitleStatusResponse,
)
from officing.schemas import TitleResponse, rejection_response

router = APIRouter(prefix="/api/v1", tags=["Gamification"])


@router.get("/titles", response_model=TitleListResponse)
async def get_titles(
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> TitleListResponse:
    """Full title catalog with the caller's unlock state."""
    statuses = await list_titles(db, user.id)
    return TitleListResponse(titles=[
        TitleStatusResponse(
            id=s.title.id,
            name=s.title.name,
            description=s.title.description,
            unlock_condition_type=s.title.unlock_condition_type,
            unlock_condition_value=s.title.unlock_condition_value,
            unlocked=s.unlocked_at is not None,
            unlocked_at=s.unlocked_at,
            is_active=s.is_active,
        )
        for s in statuses
    ])


@router.put("/users/me/title", response_model=SetActiveTitleResponse)
async def put_active_title(
    body: SetActiveTitleRequest,
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> SetActiveTitleResponse | JSONResponse:
    """Display an unlocked title, or clear it with ``titleId: null``."""
    rejection = await set_active_title(db, user.id, body.title_id)
    if rejection is not None:
        return rejection_response(rejection)
    return SetActiveTitleResponse(active_title_id=body.title_id)


@router.get("/users/me/progress", response_model=ProgressResponse)
async def get_my_progress(
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> ProgressResponse:
    summary = await get_progress_summary(db, user.id)
    return ProgressResponse(
        level=summary.level,
        current_xp=summary.current_xp,
        xp_for_next_level=summary.xp_for_next_level,
        total_points=summary.total_points,
        current_streak=summary.current_streak,
        max_streak=summary.max_streak,
        pity_counter=summary.pity_counter,
        ticket_count=summary.ticket_count,
        active_title=TitleResponse.model_validate(summary.active_title) if summary.active_title else None,
        monthly_count=summary.monthly_count,
        checked_in_today=summary.checked_in_today,
    )
