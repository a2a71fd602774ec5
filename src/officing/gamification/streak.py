"""Daily attendance streak computation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StreakResult:
    current: int
    max: int
    is_new_record: bool


def compute_streak(
    previous_streak: int,
    previous_max: int,
    checked_in_yesterday: bool,
    first_checkin: bool = False,
) -> StreakResult:
    """Derive the streak after a check-in.

    A check-in the day before extends the streak; anything else (a gap, or
    no history at all) starts over at 1. Tying the old maximum is not a new
    record.
    """
    if first_checkin:
        return StreakResult(current=1, max=1, is_new_record=True)

    current = previous_streak + 1 if checked_in_yesterday else 1
    return StreakResult(
        current=current,
        max=max(current, previous_max),
        is_new_record=current > previous_max,
    )
