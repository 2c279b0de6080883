"""Raindrop sampling: uniform points in the unit square and their classification."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class Sample:
    x: float
    y: float
    distance: float = field(init=False)
    is_inside: bool = field(init=False)

    def __post_init__(self):
        radius_sq = self.x * self.x + self.y * self.y
        object.__setattr__(self, "distance", math.sqrt(radius_sq))
        # open disk: the boundary itself counts as outside
        object.__setattr__(self, "is_inside", radius_sq < 1.0)


def _check_count(count) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError("count must be an integer")
    if count < 0:
        raise ValueError("count must be non-negative")
    return count


class Sampler:
    """Draws batches of independent raindrops from a uniform random source.

    rng must provide ``random()`` returning floats in [0, 1). When omitted a
    private ``random.Random`` is created, seeded with ``seed`` if given.
    """

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self._rng = rng if rng is not None else random.Random(seed)

    def generate(self, count: int) -> Tuple[Sample, ...]:
        count = _check_count(count)
        rng = self._rng
        drops = []
        for _ in range(count):
            x = rng.random()
            y = rng.random()
            drops.append(Sample(x, y))
        return tuple(drops)


def rain(count: int, rng: Optional[RandomSource] = None) -> Tuple[Sample, ...]:
    return Sampler(rng=rng).generate(count)
