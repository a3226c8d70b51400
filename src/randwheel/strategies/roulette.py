"""Roulette selection — probability proportional to weight."""

from __future__ import annotations

import copy
from typing import Any

from randwheel.strategies.base import BaseStrategy, check_k, register_strategy
from randwheel.wheel import RandomWheel


@register_strategy
class RouletteStrategy(BaseStrategy):
    name = "roulette"
    description = "Spin the wheel k times, with replacement"

    def select(self, wheel: RandomWheel[Any], k: int) -> list[tuple[float, Any]]:
        selected: list[tuple[float, Any]] = []
        for _ in range(check_k(k)):
            picked = wheel.peek()
            if picked is None:
                break
            selected.append(picked)
        return selected


@register_strategy
class UniqueRouletteStrategy(BaseStrategy):
    name = "roulette-unique"
    description = "Spin the wheel k times, removing each winner (without replacement)"

    def select(self, wheel: RandomWheel[Any], k: int) -> list[tuple[float, Any]]:
        # pop from a structural copy, the caller's wheel stays intact
        pool = copy.copy(wheel)
        selected: list[tuple[float, Any]] = []
        for _ in range(min(check_k(k), len(pool))):
            picked = pool.pop()
            if picked is None:
                break
            selected.append(picked)
        return selected
