from __future__ import annotations

import random

import pytest


class ScriptedSource:
    """Replays fixed ``random()`` values and counts the draws."""

    def __init__(self, *values: float):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def scripted():
    return ScriptedSource
