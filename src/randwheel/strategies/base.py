"""Base strategy ABC and registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from randwheel.wheel import RandomWheel

_REGISTRY: dict[str, type[BaseStrategy]] = {}


class BaseStrategy(ABC):
    """Abstract base for selection strategies."""

    name: str = "base"
    description: str = ""

    @abstractmethod
    def select(self, wheel: RandomWheel[Any], k: int) -> list[tuple[float, Any]]:
        """Pick ``k`` ``(weight, item)`` pairs from the wheel."""
        ...


def check_k(k: int) -> int:
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    return k


def register_strategy(cls: type[BaseStrategy]) -> type[BaseStrategy]:
    """Class decorator to register a strategy."""
    _REGISTRY[cls.name] = cls
    return cls


def get_strategy(name: str) -> BaseStrategy:
    """Instantiate a registered strategy by name."""
    if name not in _REGISTRY:
        raise KeyError(f"Unknown strategy: {name!r}. Available: {list(_REGISTRY)}")
    return _REGISTRY[name]()


def list_strategies() -> dict[str, type[BaseStrategy]]:
    """Return all registered strategies."""
    return dict(_REGISTRY)
