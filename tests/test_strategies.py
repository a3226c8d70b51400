from __future__ import annotations

import pytest

from randwheel import RandomWheel
from randwheel.strategies import BaseStrategy, get_strategy, list_strategies


@pytest.fixture
def wheel(rng):
    return RandomWheel.from_pairs([(1.0, "a"), (4.0, "b"), (2.0, "c"), (4.0, "d")], rng=rng)


def test_registry_lists_builtins():
    names = set(list_strategies())
    assert {"roulette", "roulette-unique", "top-k"} <= names
    assert all(issubclass(cls, BaseStrategy) for cls in list_strategies().values())


def test_unknown_strategy():
    with pytest.raises(KeyError, match="Unknown strategy"):
        get_strategy("tournament")


def test_roulette_draws_with_replacement(wheel):
    selected = get_strategy("roulette").select(wheel, 20)
    assert len(selected) == 20
    assert {item for _, item in selected} <= {"a", "b", "c", "d"}
    assert wheel.len() == 4


def test_roulette_on_empty_wheel():
    assert get_strategy("roulette").select(RandomWheel(), 3) == []


def test_unique_roulette_has_no_repeats(wheel):
    selected = get_strategy("roulette-unique").select(wheel, 3)
    items = [item for _, item in selected]
    assert len(items) == 3
    assert len(set(items)) == 3
    assert wheel.len() == 4
    assert wheel.weight_sum() == 11.0


def test_unique_roulette_caps_k(wheel):
    selected = get_strategy("roulette-unique").select(wheel, 10)
    assert sorted(item for _, item in selected) == ["a", "b", "c", "d"]


def test_top_k_orders_by_weight_then_storage(wheel):
    selected = get_strategy("top-k").select(wheel, 3)
    assert selected == [(4.0, "b"), (4.0, "d"), (2.0, "c")]


@pytest.mark.parametrize("name", ["roulette", "roulette-unique", "top-k"])
def test_negative_k_rejected(wheel, name):
    with pytest.raises(ValueError):
        get_strategy(name).select(wheel, -1)


@pytest.mark.parametrize("name", ["roulette", "roulette-unique", "top-k"])
def test_zero_k_selects_nothing(wheel, name):
    assert get_strategy(name).select(wheel, 0) == []
