"""Random wheel — fitness proportionate selection over weighted items.

Each item is stored with a strictly positive weight. A draw picks an item with
probability ``weight / weight_sum`` by scanning the entries linearly, see
https://wikipedia.org/wiki/Fitness_proportionate_selection.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Generic, Iterable, Iterator, TypeVar

from pydantic import BaseModel, ConfigDict

from randwheel.rng import UniformSource, default_source, uniform

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WheelError(Exception):
    """Broken wheel contract. Fix the calling code, don't handle it."""


class InvalidWeightError(WheelError, ValueError):
    """A weight was not a number, or was zero, negative or NaN."""


class WeightOverflowError(WheelError, OverflowError):
    """The weight sum reached an infinite value."""


class Entry(BaseModel, Generic[T]):
    """A stored (weight, item) pair.

    Fields are plain attributes: ``iter_mut()`` hands these out so callers can
    reassign ``weight`` or ``item`` in place.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    weight: float
    item: T

    def as_tuple(self) -> tuple[float, T]:
        return self.weight, self.item


class ItemRef(Generic[T]):
    """Handle on a peeked entry: read-only weight, writable item."""

    __slots__ = ("_entry",)

    def __init__(self, entry: Entry[T]):
        self._entry = entry

    @property
    def weight(self) -> float:
        return self._entry.weight

    @property
    def item(self) -> T:
        return self._entry.item

    @item.setter
    def item(self, value: T) -> None:
        self._entry.item = value

    def __repr__(self) -> str:
        return f"ItemRef(weight={self.weight!r}, item={self.item!r})"


def _checked_weight(weight: Any) -> float:
    if isinstance(weight, (str, bytes)):
        raise InvalidWeightError(f"Weight {weight!r} is not a number")
    try:
        value = float(weight)
    except (TypeError, ValueError):
        raise InvalidWeightError(f"Weight {weight!r} is not a number") from None
    if not value > 0.0:
        raise InvalidWeightError(f"Weight {weight!r} is lower or equal to zero")
    return value


class RandomWheel(Generic[T]):
    """A weighted bag of items with random peek and pop.

    The wheel caches the sum of all weights. ``push`` and ``pop`` keep it up to
    date; if weights are changed through ``iter_mut()``, call
    ``recompute_weight_sum()`` before drawing again.
    """

    def __init__(self, rng: UniformSource | None = None):
        self.rng: UniformSource = rng if rng is not None else default_source()
        self._entries: list[Entry[T]] = []
        self._weight_sum = 0.0
        self._capacity = 0

    # ── Construction ──────────────────────────────────────

    @classmethod
    def from_items(cls, items: Iterable[T], rng: UniformSource | None = None) -> RandomWheel[T]:
        """Wheel where every item gets weight 1.0, in input order."""
        wheel = cls(rng)
        wheel._entries = [Entry(weight=1.0, item=item) for item in items]
        wheel._weight_sum = float(len(wheel._entries))
        return wheel

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, T]], rng: UniformSource | None = None) -> RandomWheel[T]:
        """Wheel built by pushing each ``(weight, item)`` pair in order."""
        wheel = cls(rng)
        for weight, item in pairs:
            wheel.push(weight, item)
        return wheel

    @classmethod
    def with_capacity(cls, n: int, rng: UniformSource | None = None) -> RandomWheel[T]:
        """Empty wheel sized for at least ``n`` entries."""
        wheel = cls(rng)
        wheel._capacity = n
        return wheel

    # ── Capacity / introspection ──────────────────────────

    def reserve(self, additional: int) -> None:
        """Make room for at least ``additional`` more entries."""
        self._capacity = max(self._capacity, len(self._entries) + additional)

    def capacity(self) -> int:
        """Number of entries the wheel is sized for. A hint only."""
        return max(self._capacity, len(self._entries))

    def len(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def weight_sum(self) -> float:
        return self._weight_sum

    def clear(self) -> None:
        """Remove every entry. Capacity is kept."""
        self._capacity = self.capacity()
        self._entries.clear()
        self._weight_sum = 0.0

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RandomWheel(len={len(self._entries)}, weight_sum={self._weight_sum!r})"

    # ── Iteration ─────────────────────────────────────────

    def iter(self) -> Iterator[tuple[float, T]]:
        """Read-only ``(weight, item)`` pairs in storage order."""
        return (entry.as_tuple() for entry in self._entries)

    def __iter__(self) -> Iterator[tuple[float, T]]:
        return self.iter()

    def iter_mut(self) -> Iterator[Entry[T]]:
        """The stored entries themselves, in storage order.

        Assigning ``entry.weight`` leaves the cached sum stale until
        ``recompute_weight_sum()`` is called.
        """
        return iter(self._entries)

    def drain(self) -> Iterator[tuple[float, T]]:
        """Pop entries at random until the wheel is empty."""
        while self._entries:
            popped = self.pop()
            if popped is None:
                return
            yield popped

    # ── Insertion ─────────────────────────────────────────

    def push(self, weight: float, item: T) -> None:
        """Append ``item`` with the given strictly positive weight."""
        value = _checked_weight(weight)
        total = self._weight_sum + value
        if math.isinf(total):
            raise WeightOverflowError(f"Weight sum reached an infinite value pushing weight {weight!r}")
        self._entries.append(Entry(weight=value, item=item))
        self._weight_sum = total

    def recompute_weight_sum(self) -> None:
        """Re-derive the cached sum from every entry's weight."""
        total = 0.0
        for entry in self._entries:
            total += _checked_weight(entry.weight)
        if math.isinf(total):
            raise WeightOverflowError(f"Weight sum reached an infinite value over {len(self._entries)} entries")
        logger.debug("Recomputed weight sum: %r -> %r", self._weight_sum, total)
        self._weight_sum = total

    # ── Selection ─────────────────────────────────────────

    def _random_index(self) -> int | None:
        if not self._entries:
            return None
        if len(self._entries) == 1:
            # single entry: certain pick, no draw
            return 0

        dist = uniform(self.rng, 0.0, self._weight_sum) if self._weight_sum > 0.0 else 0.0
        for index, entry in enumerate(self._entries):
            dist -= entry.weight
            if dist <= 0.0:
                return index

        logger.warning(
            "Scan ran past the last entry (weight_sum=%r); was recompute_weight_sum() skipped?",
            self._weight_sum,
        )
        return None

    def peek(self) -> tuple[float, T] | None:
        """A random ``(weight, item)``, left in place."""
        index = self._random_index()
        if index is None:
            return None
        return self._entries[index].as_tuple()

    def peek_mut(self) -> ItemRef[T] | None:
        """A random entry whose item can be replaced through the returned ref."""
        index = self._random_index()
        if index is None:
            return None
        return ItemRef(self._entries[index])

    def pop(self) -> tuple[float, T] | None:
        """Remove a random entry and return it as ``(weight, item)``."""
        index = self._random_index()
        if index is None:
            return None
        entry = self._entries.pop(index)
        remaining = self._weight_sum - entry.weight
        if not self._entries:
            remaining = 0.0
        elif entry.weight >= remaining or remaining <= 0.0:
            # subtraction cancelled the smaller weights out of the sum
            remaining = math.fsum(e.weight for e in self._entries)
        self._weight_sum = remaining
        return entry.as_tuple()

    # ── Copying ───────────────────────────────────────────

    def clone(self) -> RandomWheel[T]:
        """Independent wheel with every item deep-copied.

        Raises whatever the copy protocol raises for items that cannot be
        duplicated (usually ``TypeError``).
        """
        return self.__deepcopy__({})

    def __copy__(self) -> RandomWheel[T]:
        # fresh entries, shared items
        other: RandomWheel[T] = RandomWheel(self.rng)
        other._entries = [Entry(weight=e.weight, item=e.item) for e in self._entries]
        other._weight_sum = self._weight_sum
        other._capacity = self._capacity
        return other

    def __deepcopy__(self, memo: dict[int, Any]) -> RandomWheel[T]:
        other: RandomWheel[T] = RandomWheel(self.rng)
        memo[id(self)] = other
        other._entries = [Entry(weight=e.weight, item=copy.deepcopy(e.item, memo)) for e in self._entries]
        other._weight_sum = self._weight_sum
        other._capacity = self._capacity
        return other
