"""Top-K selection strategy."""

from __future__ import annotations

from typing import Any

from randwheel.strategies.base import BaseStrategy, check_k, register_strategy
from randwheel.wheel import RandomWheel


@register_strategy
class TopKStrategy(BaseStrategy):
    name = "top-k"
    description = "Select the K heaviest entries"

    def select(self, wheel: RandomWheel[Any], k: int) -> list[tuple[float, Any]]:
        # sorted() is stable, ties keep storage order
        sorted_entries = sorted(wheel.iter(), key=lambda e: e[0], reverse=True)
        return sorted_entries[:check_k(k)]
