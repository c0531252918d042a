"""Random source: the single draw stream shared by every engine.

One RandomSource is created per run and injected into the generator,
scheduler, resolver, influencer and tally. Every draw advances the same
stream, so the order in which engines consume it is part of the
simulation's behaviour: the same seed and the same traversal order
reproduce the same election exactly.
"""

from __future__ import annotations

import math
import random
from typing import Optional


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class RandomSource:
    """Seedable integer draws over one random.Random stream."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def uniform(self, low: int, high: int) -> int:
        """Integer uniformly drawn from [low, high] inclusive."""
        if low > high:
            raise ValueError(f"uniform() range is empty: [{low}, {high}]")
        return self._rng.randint(low, high)

    def normal_round(self, center: float, stddev: float) -> int:
        """Normal draw around center, rounded half away from zero."""
        return round_half_away(self._rng.gauss(center, stddev))

    def permutation(self, size: int) -> list[int]:
        """A shuffled ordering of range(size)."""
        if size < 0:
            raise ValueError(f"permutation size must be >= 0, got {size}")
        order = list(range(size))
        self._rng.shuffle(order)
        return order
