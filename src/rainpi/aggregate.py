"""Accumulated raindrops, the running pi estimate and its statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .sampler import Sample


@dataclass(frozen=True)
class Statistics:
    total: int
    inside: int
    outside: int
    estimate: Optional[float]
    stderr: Optional[float]
    error: Optional[float]


class SampleSet:
    """Ordered, append-only collection of every raindrop in a session.

    Instances never change; ``append`` returns a new set that shares nothing
    mutable with the old one.
    """

    __slots__ = ("_samples", "_inside_count")

    def __init__(self, samples: Iterable[Sample] = ()):
        self._samples, self._inside_count = self._extend((), 0, samples)

    @staticmethod
    def _extend(current: Tuple[Sample, ...], inside_count: int, samples: Iterable[Sample]):
        batch = tuple(samples)
        for s in batch:
            if not isinstance(s, Sample):
                raise TypeError(f"expected Sample, got {type(s).__name__}")
            if s.is_inside:
                inside_count += 1
        return current + batch, inside_count

    def append(self, samples: Iterable[Sample]) -> "SampleSet":
        new = SampleSet.__new__(SampleSet)
        new._samples, new._inside_count = self._extend(self._samples, self._inside_count, samples)
        return new

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._samples

    @property
    def inside(self) -> Tuple[Sample, ...]:
        return tuple(s for s in self._samples if s.is_inside)

    @property
    def outside(self) -> Tuple[Sample, ...]:
        return tuple(s for s in self._samples if not s.is_inside)

    @property
    def total(self) -> int:
        return len(self._samples)

    @property
    def inside_count(self) -> int:
        return self._inside_count

    @property
    def outside_count(self) -> int:
        return len(self._samples) - self._inside_count

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SampleSet):
            return NotImplemented
        return self._samples == other._samples

    def __hash__(self) -> int:
        return hash(self._samples)

    def __repr__(self) -> str:
        return f"SampleSet(total={self.total}, inside={self.inside_count})"


EMPTY = SampleSet()


def point_cloud(samples: Sequence[Sample]) -> np.ndarray:
    """Pack raindrops into a float32 ``(n, 2)`` array of x, y pairs for plotting."""
    xy = np.empty((len(samples), 2), dtype=np.float32)
    for i, s in enumerate(samples):
        xy[i, 0] = s.x
        xy[i, 1] = s.y
    return xy


def estimate(sample_set: SampleSet) -> Optional[float]:
    """Return ``4 * inside / total``, or None when no raindrops have fallen."""
    total = sample_set.total
    if total == 0:
        return None
    return 4 * sample_set.inside_count / total


def summarize(sample_set: SampleSet) -> Statistics:
    total = sample_set.total
    inside = sample_set.inside_count
    if total == 0:
        return Statistics(total=0, inside=0, outside=0, estimate=None, stderr=None, error=None)
    pi_hat = estimate(sample_set)
    p = inside / total
    stderr = 4.0 * math.sqrt(p * (1.0 - p) / total)
    return Statistics(
        total=total,
        inside=inside,
        outside=total - inside,
        estimate=pi_hat,
        stderr=stderr,
        error=pi_hat - math.pi,
    )
