"""Response models for lottery endpoints."""

from __future__ import annotations

from officing.schemas import CamelModel, PrizeResponse, TitleResponse


class LotteryDrawResponse(CamelModel):
    success: bool = True
    prize: PrizeResponse
    rank: str
    pity_counter: int
    tickets_remaining: int
    unlocked_title: TitleResponse | None = None


class PrizeListResponse(CamelModel):
    prizes: list[PrizeResponse]
