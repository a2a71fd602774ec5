"""Point shop API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from officing.auth.dependencies import CurrentUser, get_current_user
from officing.dependencies import get_db, get_redis_dep
from officing.schemas import rejection_response
from officing.shop.schemas import PurchaseRequest, PurchaseResponse, ShopItemListResponse, ShopItemResponse
from officing.shop.service import list_shop_items, purchase_item

router = APIRouter(prefix="/api/v1/shop", tags=["Shop"])


@router.get("/items", response_model=ShopItemListResponse)
async def get_items(db: AsyncSession = Depends(get_db)) -> ShopItemListResponse:  # noqa: B008
    items = await list_shop_items(db)
    return ShopItemListResponse(items=[ShopItemResponse.model_validate(i) for i in items])


@router.post("/purchase", response_model=PurchaseResponse)
async def post_purchase(
    body: PurchaseRequest,
    user: CurrentUser = Depends(get_current_user),  # noqa: B008
    db: AsyncSession = Depends(get_db),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
) -> PurchaseResponse | JSONResponse:
    """Spend points on a shop item."""
    outcome = await purchase_item(db, redis, user.id, body.item_id)
    if outcome.rejection is not None:
        return rejection_response(outcome.rejection)
    return PurchaseResponse(
        item=ShopItemResponse.model_validate(outcome.item),
        points_remaining=outcome.points_remaining,
        tickets_remaining=outcome.tickets_remaining,
    )
