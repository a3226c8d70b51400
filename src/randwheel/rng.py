"""Uniform random source used by the wheel for its draws."""

from __future__ import annotations

import math
import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class UniformSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0.0, 1.0).

    ``random.Random`` instances, the ``random`` module itself and
    ``numpy.random.Generator`` all qualify.
    """

    def random(self) -> float: ...


def default_source() -> UniformSource:
    """Process-wide generator shared by wheels built without an explicit source."""
    return random  # type: ignore[return-value]


def seeded(seed: int | None) -> UniformSource:
    """A private generator, deterministic when ``seed`` is given."""
    return random.Random(seed)


def uniform(rng: UniformSource, low: float, high: float) -> float:
    """Draw from the half-open range [low, high).

    ``random.uniform`` can return ``high`` through rounding, so the draw is
    scaled from ``rng.random()`` and kept strictly below ``high``.
    """
    if not low < high:
        raise ValueError(f"Empty range [{low!r}, {high!r})")
    value = low + (high - low) * rng.random()
    if value >= high:
        # rounding pushed the product onto the excluded bound
        return math.nextafter(high, low)
    return value
