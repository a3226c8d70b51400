"""Wheel presets — named weighted item lists, built in or user-defined."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from randwheel.rng import UniformSource
from randwheel.wheel import RandomWheel

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_DIRNAME = ".randwheel"
CONFIG_FILENAME = "wheels.toml"


class WheelEntry(BaseModel):
    """An item with a selection weight."""

    item: str
    weight: float = Field(default=1.0, gt=0)


class WheelPreset(BaseModel):
    """A named collection of weighted items."""

    name: str
    description: str = ""
    entries: list[WheelEntry]

    @property
    def total_weight(self) -> float:
        return sum(e.weight for e in self.entries)


# ── Built-in presets ─────────────────────────────────────

BUILTIN_PRESETS: dict[str, WheelPreset] = {
    "coin": WheelPreset(
        name="coin",
        description="Fair coin toss",
        entries=[
            WheelEntry(item="heads"),
            WheelEntry(item="tails"),
        ],
    ),
    "d6": WheelPreset(
        name="d6",
        description="Six-sided die",
        entries=[WheelEntry(item=str(face)) for face in range(1, 7)],
    ),
    "loot": WheelPreset(
        name="loot",
        description="Classic loot table, common drops dominate",
        entries=[
            WheelEntry(item="common", weight=60.0),
            WheelEntry(item="uncommon", weight=25.0),
            WheelEntry(item="rare", weight=10.0),
            WheelEntry(item="epic", weight=4.0),
            WheelEntry(item="legendary", weight=1.0),
        ],
    ),
    "weather": WheelPreset(
        name="weather",
        description="Daily weather for a temperate simulation",
        entries=[
            WheelEntry(item="sunny", weight=5.0),
            WheelEntry(item="cloudy", weight=3.0),
            WheelEntry(item="rain", weight=1.5),
            WheelEntry(item="storm", weight=0.5),
        ],
    ),
}


# ── Loading & lookup ─────────────────────────────────────

class PresetError(ValueError):
    """A user preset in wheels.toml failed validation."""


def config_path(config_dir: Path | None = None) -> Path:
    base = config_dir if config_dir is not None else Path.cwd()
    return base / CONFIG_DIRNAME / CONFIG_FILENAME


def _read_user_presets(toml_path: Path) -> dict[str, WheelPreset]:
    with open(toml_path, "rb") as f:
        data = tomllib.load(f)

    user: dict[str, WheelPreset] = {}
    for name, cfg in data.get("wheels", {}).items():
        if not cfg.get("entries"):
            continue
        try:
            user[name] = WheelPreset.model_validate({**cfg, "name": name})
        except ValidationError as e:
            errors = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            raise PresetError(f"Invalid preset {name!r} in {toml_path}: {errors}") from e
    return user


def load_presets(config_dir: Path | None = None) -> dict[str, WheelPreset]:
    """Built-in presets, overridden and extended by .randwheel/wheels.toml.

    Raises ``PresetError`` naming the preset and file when a user preset is
    invalid, e.g. a weight that is not strictly positive.
    """
    presets = dict(BUILTIN_PRESETS)
    toml_path = config_path(config_dir)
    if toml_path.is_file():
        presets.update(_read_user_presets(toml_path))
    return presets


def get_preset(name: str, config_dir: Path | None = None) -> WheelPreset:
    presets = load_presets(config_dir)
    try:
        return presets[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}. Available: {', '.join(sorted(presets))}") from None


def build_wheel(preset: WheelPreset, rng: UniformSource | None = None) -> RandomWheel[str]:
    """Fill a wheel with the preset's items, in declaration order."""
    wheel: RandomWheel[str] = RandomWheel.with_capacity(len(preset.entries), rng)
    for entry in preset.entries:
        wheel.push(entry.weight, entry.item)
    return wheel
