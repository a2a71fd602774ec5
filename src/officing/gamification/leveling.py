"""XP curve and level-up computation.

Requirement to advance from level L to L+1 is ``floor(100 * (L+1) ** 1.5)``.
``current_xp`` is always the remainder after every completed level-up.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

XP_BASE = 100
XP_GROWTH_RATE = 1.5


def xp_required_for_level(level: int) -> int:
    """XP needed to reach ``level`` from the level below it."""
    if level < 1:
        msg = f"level must be >= 1, got {level}"
        raise ValueError(msg)
    return math.floor(XP_BASE * math.pow(level, XP_GROWTH_RATE))


@dataclass(frozen=True)
class LevelResult:
    level: int
    current_xp: int
    leveled_up: bool
    levels_gained: int

    @property
    def xp_for_next_level(self) -> int:
        return xp_required_for_level(self.level + 1)


def apply_xp(current_level: int, current_xp: int, xp_gained: int) -> LevelResult:
    """Add XP and roll over as many levels as the running total allows."""
    if current_level < 1:
        msg = f"current_level must be >= 1, got {current_level}"
        raise ValueError(msg)
    if current_xp < 0 or xp_gained < 0:
        msg = "XP values must be non-negative"
        raise ValueError(msg)

    level = current_level
    xp = current_xp + xp_gained
    needed = xp_required_for_level(level + 1)
    while xp >= needed:
        xp -= needed
        level += 1
        needed = xp_required_for_level(level + 1)

    return LevelResult(
        level=level,
        current_xp=xp,
        leveled_up=level > current_level,
        levels_gained=level - current_level,
    )
