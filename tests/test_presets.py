from __future__ import annotations

import pytest

from randwheel.presets import (
    BUILTIN_PRESETS,
    PresetError,
    WheelEntry,
    WheelPreset,
    build_wheel,
    config_path,
    get_preset,
    load_presets,
)


def _write_config(tmp_path, body: str) -> None:
    config = tmp_path / ".randwheel"
    config.mkdir()
    (config / "wheels.toml").write_text(body)


def test_builtins_without_config(tmp_path):
    presets = load_presets(tmp_path)
    assert set(BUILTIN_PRESETS) <= set(presets)
    assert presets["loot"].total_weight == 100.0
    assert [e.item for e in presets["d6"].entries] == ["1", "2", "3", "4", "5", "6"]


def test_user_presets_merge_and_override(tmp_path):
    _write_config(
        tmp_path,
        """
[wheels.potions]
description = "Potion drops"
entries = [
    { item = "healing", weight = 3.0 },
    { item = "mana" },
]

[wheels.coin]
entries = [{ item = "heads", weight = 9 }, { item = "tails" }]

[wheels.empty]
entries = []
""",
    )
    presets = load_presets(tmp_path)

    potions = presets["potions"]
    assert potions.description == "Potion drops"
    assert [(e.item, e.weight) for e in potions.entries] == [("healing", 3.0), ("mana", 1.0)]

    assert presets["coin"].entries[0].weight == 9.0
    assert "empty" not in presets
    assert "loot" in presets


def test_user_preset_with_bad_weight_is_rejected(tmp_path):
    _write_config(tmp_path, '[wheels.bad]\nentries = [{ item = "x", weight = 0 }]\n')
    with pytest.raises(PresetError, match=r"Invalid preset 'bad' in .*wheels.toml: entries.0.weight"):
        load_presets(tmp_path)


def test_get_preset_unknown_lists_available(tmp_path):
    with pytest.raises(KeyError, match="Available: coin, d6, loot, weather"):
        get_preset("nope", tmp_path)


def test_build_wheel_keeps_order_and_weights(rng):
    preset = WheelPreset(
        name="t",
        entries=[WheelEntry(item="a", weight=2.5), WheelEntry(item="b")],
    )
    wheel = build_wheel(preset, rng)
    assert list(wheel) == [(2.5, "a"), (1.0, "b")]
    assert wheel.weight_sum() == 3.5
    assert wheel.rng is rng
    assert wheel.capacity() >= 2


def test_build_wheel_from_builtin(tmp_path, rng):
    wheel = build_wheel(get_preset("weather", tmp_path), rng)
    assert wheel.len() == 4
    assert wheel.weight_sum() == 10.0


def test_config_path_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert config_path() == tmp_path / ".randwheel" / "wheels.toml"
    assert config_path(tmp_path / "other") == tmp_path / "other" / ".randwheel" / "wheels.toml"


def test_bad_user_preset_fails_cli_listing(tmp_path):
    from typer.testing import CliRunner

    from randwheel.cli import app

    _write_config(tmp_path, '[wheels.bad]\nentries = [{ item = "x", weight = -2 }]\n')
    result = CliRunner().invoke(app, ["list-presets", "--config-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "Invalid preset" in result.output
