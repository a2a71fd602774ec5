"""Request/response models for the point shop."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from officing.schemas import CamelModel


class ShopItemResponse(CamelModel):
    id: int
    name: str
    description: str
    cost: int
    item_type: str
    item_value: dict[str, Any]


class ShopItemListResponse(CamelModel):
    items: list[ShopItemResponse]


class PurchaseRequest(CamelModel):
    item_id: int = Field(gt=0)


class PurchaseResponse(CamelModel):
    success: bool = True
    item: ShopItemResponse
    points_remaining: int
    tickets_remaining: int
