"""Fitness proportionate selection: a wheel of weighted items."""

from randwheel.wheel import (  # noqa: F401
    Entry,
    InvalidWeightError,
    ItemRef,
    RandomWheel,
    WeightOverflowError,
    WheelError,
)

__version__ = "0.1.0"
