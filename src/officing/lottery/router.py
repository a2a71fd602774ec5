"""Lottery API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from officing.auth.dependencies import CurrentUser, get_current_user
from officing.dependencies import get_db, get_redis_dep
from officing.lottery.schemas import LotteryDrawResponse, PrizeListResponse
from officing.lottery.service import draw_lottery, list_available_prizes
from officing.schemas import PrizeResponse, TitleResponse, rejection_response

router = APIRouter(prefix="/api/v1", tags=["Lottery"])


@router.post("/lottery/draw", response_model=LotteryDrawResponse)
async def post_draw(
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
) -> LotteryDrawResponse | JSONResponse:
    """Spend one ticket on a prize draw."""
    outcome = await draw_lottery(db, redis, user.id)
    if outcome.rejection is not None:
        return rejection_response(outcome.rejection)

    return LotteryDrawResponse(
        prize=PrizeResponse.model_validate(outcome.prize),
        rank=outcome.prize.rank,
        pity_counter=outcome.pity_counter,
        tickets_remaining=outcome.tickets_remaining,
        unlocked_title=TitleResponse.model_validate(outcome.unlocked_title) if outcome.unlocked_title else None,
    )


@router.get("/prizes", response_model=PrizeListResponse)
async def get_prizes(db: AsyncSession = Depends(get_db)) -> PrizeListResponse:  # noqa: B008
    """Public prize catalog: everything that can currently be drawn."""
    prizes = await list_available_prizes(db)
    return PrizeListResponse(prizes=[PrizeResponse.model_validate(p) for p in prizes])
