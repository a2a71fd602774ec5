"""Business-rule rejections.

Rejections are expected outcomes, not failures: service functions return
them inside their outcome object and routers render them with
``success: false`` so clients can show a specific message.
"""

from __future__ import annotations

from enum import Enum


class Rejection(Enum):
    """Expected business-rule outcome with its user-facing message and HTTP status."""

    DUPLICATE_CHECKIN = ("Already checked in today", 200)
    QUEST_NOT_FOUND = ("Quest not found", 404)
    QUEST_ALREADY_COMPLETED = ("Quest already completed", 409)
    NOT_ENOUGH_DAILY_QUESTS = ("Not enough daily quests in the pool", 409)
    INSUFFICIENT_TICKETS = ("Insufficient tickets", 400)
    NO_PRIZES_AVAILABLE = ("No available prizes", 409)
    ITEM_NOT_FOUND = ("Item not found", 404)
    INSUFFICIENT_POINTS = ("Insufficient points", 400)
    TITLE_ALREADY_OWNED = ("Title already owned", 409)
    TITLE_NOT_UNLOCKED = ("Title not unlocked", 403)

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code


class WriteConflictError(Exception):
    """A conditional write lost a race with a concurrent request.

    The surrounding transaction is abandoned; the caller is expected to retry.
    """
