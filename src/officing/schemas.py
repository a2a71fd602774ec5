"""Shared pydantic models and response helpers."""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from officing.outcomes import Rejection


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TitleResponse(CamelModel):
    id: int
    name: str
    description: str
    unlock_condition_type: str
    unlock_condition_value: dict[str, Any]


class PrizeResponse(CamelModel):
    id: int
    name: str
    description: str
    rank: str
    reward_type: str
    reward_value: dict[str, Any]
    stock: int | None = None


def rejection_response(rejection: Rejection, **extra: Any) -> JSONResponse:  # noqa: ANN401
    """Render a business-rule rejection as ``{success: false, error, ...}``."""
    return JSONResponse(
        status_code=rejection.status_code,
        content={"success": False, "error": rejection.message, **extra},
    )
