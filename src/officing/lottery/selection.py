"""Pity-aware prize pool selection and roulette-wheel draw.

Pure functions over anything with ``rank`` and ``weight`` attributes so the
draw can be asserted exactly with a seeded ``random.Random``.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

HIGH_RANKS = frozenset({"S", "A"})


class Weighted(Protocol):
    rank: str
    weight: float


P = TypeVar("P", bound=Weighted)


def eligible_pool(prizes: Sequence[P], pity_counter: int, pity_threshold: int) -> tuple[list[P], bool]:
    """Restrict to S/A prizes once the pity threshold is reached.

    Falls back to the full pool when no S/A prize is in stock. Returns
    (pool, pity_applied).
    """
    if pity_counter < pity_threshold:
        return list(prizes), False
    high = [p for p in prizes if p.rank in HIGH_RANKS]
    if not high:
        return list(prizes), False
    return high, True


def pick_weighted(prizes: Sequence[P], rng: random.Random) -> P:
    """Roulette-wheel selection.

    Draws r in [0, total_weight) and walks the pool subtracting weights; the
    first prize that brings r to <= 0 wins.
    """
    if not prizes:
        msg = "cannot draw from an empty prize pool"
        raise ValueError(msg)

    total_weight = sum(p.weight for p in prizes)
    remaining = rng.random() * total_weight
    for prize in prizes:
        remaining -= prize.weight
        if remaining <= 0:
            return prize
    # Float rounding can leave a sliver above zero after the last prize.
    return prizes[-1]


def next_pity_counter(rank: str, pity_counter: int) -> int:
    """Reset on S/A, otherwise count one more miss."""
    if rank in HIGH_RANKS:
        return 0
    return pity_counter + 1
