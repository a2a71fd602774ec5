"""Best-effort Redis pub/sub fan-out for reward events."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

CHANNEL_LEVEL_UP = "pubsub:level_up"
CHANNEL_TITLE_UNLOCKED = "pubsub:title_unlocked"
CHANNEL_LOTTERY_DRAW = "pubsub:lottery_draw"


async def publish_event(redis: object, channel: str, payload: dict[str, Any]) -> None:
    """Publish a JSON payload. Must only be called after the transaction committed."""
    if redis is None:
        return
    try:
        await redis.publish(channel, json.dumps(payload, default=str))  # type: ignore[attr-defined]
    except Exception:
        logger.warning("Failed to publish %s event", channel, exc_info=True)


async def publish_title_unlocks(redis: object, user_id: str, titles: list[Any]) -> None:
    """Publish one title_unlocked event per newly unlocked title."""
    for title in titles:
        await publish_event(redis, CHANNEL_TITLE_UNLOCKED, {
            "user_id": user_id,
            "title_id": title.id,
            "title_name": title.name,
        })
