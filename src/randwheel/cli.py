"""randwheel CLI — typer entry point."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Annotated, Optional

from dotenv import load_dotenv
import typer

# Load .env from cwd before anything reads env vars
load_dotenv(Path.cwd() / ".env")
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from randwheel.presets import PresetError, build_wheel, get_preset, load_presets
from randwheel.rng import seeded
from randwheel.strategies import get_strategy, list_strategies
from randwheel.wheel import RandomWheel, WheelError

app = typer.Typer(
    name="randwheel",
    help="Spin weighted random wheels: sample, drain and select by weight.",
    no_args_is_help=True,
)
console = Console()

PresetArg = Annotated[Optional[str], typer.Argument(help="Preset name (see list-presets)")]
EntryOpt = Annotated[
    Optional[list[str]],
    typer.Option("-e", "--entry", help="Extra entry as ITEM=WEIGHT or ITEM (weight 1) (repeatable)"),
]
SeedOpt = Annotated[Optional[int], typer.Option(envvar="RANDWHEEL_SEED", help="Seed for reproducible draws")]
ConfigDirOpt = Annotated[Optional[Path], typer.Option("--config-dir", help="Directory holding .randwheel/wheels.toml")]
VerboseOpt = Annotated[bool, typer.Option("-v", "--verbose", help="Debug logging")]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _fail(message: str) -> typer.Exit:
    console.print(f"[bold red]Error:[/] {escape(message)}")
    return typer.Exit(1)


def parse_entry(raw: str) -> tuple[float, str]:
    """Parse ``ITEM=WEIGHT`` (or a bare ``ITEM``) into ``(weight, item)``."""
    item, sep, weight = raw.rpartition("=")
    if not sep:
        return 1.0, raw
    if not item:
        raise ValueError(f"Missing item in entry {raw!r}")
    try:
        return float(weight), item
    except ValueError:
        raise ValueError(f"Bad weight {weight!r} in entry {raw!r}") from None


def _build(
    preset: str | None,
    entries: list[str] | None,
    seed: int | None,
    config_dir: Path | None,
) -> RandomWheel[str]:
    if preset is None and not entries:
        raise _fail("Give a preset name or at least one --entry.")
    rng = seeded(seed) if seed is not None else None
    try:
        wheel = build_wheel(get_preset(preset, config_dir), rng) if preset else RandomWheel(rng)
        for raw in entries or []:
            wheel.push(*parse_entry(raw))
    except KeyError as e:
        raise _fail(e.args[0]) from None
    except (WheelError, PresetError, ValueError) as e:
        raise _fail(str(e)) from None
    return wheel


def _preview(item: str, width: int = 60) -> str:
    return item[:width] + ("..." if len(item) > width else "")


# ── spin ──────────────────────────────────────────────────

@app.command()
def spin(
    preset: PresetArg = None,
    entry: EntryOpt = None,
    n_spins: Annotated[int, typer.Option("-n", "--n-spins", help="Number of spins (peeks)")] = 1000,
    seed: SeedOpt = None,
    config_dir: ConfigDirOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Spin the wheel N times without removing anything and tally the results."""
    _setup_logging(verbose)
    wheel = _build(preset, entry, seed, config_dir)

    counts: Counter[str] = Counter()
    for _ in range(n_spins):
        picked = wheel.peek()
        if picked is not None:
            counts[picked[1]] += 1

    weights: dict[str, float] = {}
    for weight, item in wheel.iter():
        weights[item] = weights.get(item, 0.0) + weight
    total = wheel.weight_sum()

    table = Table(title=f"{n_spins} spins over {len(wheel)} entries (weight sum {total:g})")
    table.add_column("Item", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Expected", justify="right")
    table.add_column("Observed", justify="right", style="bold")
    table.add_column("Observed %", justify="right")
    for item, weight in weights.items():
        observed = counts.get(item, 0)
        table.add_row(
            _preview(item), f"{weight:g}", f"{weight / total * 100:.1f}%",
            str(observed), f"{observed / n_spins * 100:.1f}%" if n_spins else "-",
        )
    console.print(table)


# ── drain ─────────────────────────────────────────────────

@app.command()
def drain(
    preset: PresetArg = None,
    entry: EntryOpt = None,
    seed: SeedOpt = None,
    config_dir: ConfigDirOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Pop every entry at random and show the order they came out in."""
    _setup_logging(verbose)
    wheel = _build(preset, entry, seed, config_dir)

    table = Table(title=f"Drained {len(wheel)} entries")
    table.add_column("#", justify="right")
    table.add_column("Item", style="cyan")
    table.add_column("Weight", justify="right")
    for i, (weight, item) in enumerate(wheel.drain(), 1):
        table.add_row(str(i), _preview(item), f"{weight:g}")
    console.print(table)


# ── select ────────────────────────────────────────────────

@app.command()
def select(
    preset: PresetArg = None,
    entry: EntryOpt = None,
    strategy: Annotated[str, typer.Option("-s", "--strategy", help="Selection strategy")] = "roulette",
    k: Annotated[int, typer.Option(help="Number to select")] = 3,
    seed: SeedOpt = None,
    config_dir: ConfigDirOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Select K entries with a named strategy."""
    _setup_logging(verbose)
    wheel = _build(preset, entry, seed, config_dir)

    try:
        selected = get_strategy(strategy).select(wheel, k)
    except KeyError as e:
        raise _fail(e.args[0]) from None
    except ValueError as e:
        raise _fail(str(e)) from None

    if not selected:
        console.print("[yellow]Nothing selected.[/]")
        raise typer.Exit(1)

    table = Table(title=f"Selected {len(selected)} entries ({strategy})")
    table.add_column("#", justify="right")
    table.add_column("Item", style="cyan")
    table.add_column("Weight", justify="right", style="bold")
    for i, (weight, item) in enumerate(selected, 1):
        table.add_row(str(i), _preview(item), f"{weight:g}")
    console.print(table)


# ── list-presets ──────────────────────────────────────────

@app.command(name="list-presets")
def list_presets_cmd(config_dir: ConfigDirOpt = None) -> None:
    """List available presets (builtins + user-defined)."""
    try:
        presets = load_presets(config_dir)
    except PresetError as e:
        raise _fail(str(e)) from None

    for name, preset in sorted(presets.items()):
        title = f"Preset: {name}" + (f" — {preset.description}" if preset.description else "")
        table = Table(title=title)
        table.add_column("Item", style="cyan")
        table.add_column("Weight", justify="right")
        total_weight = preset.total_weight
        for e in preset.entries:
            pct = e.weight / total_weight * 100
            table.add_row(e.item, f"{e.weight:g} ({pct:.0f}%)")
        console.print(table)
        console.print()


# ── list-strategies ──────────────────────────────────────

@app.command(name="list-strategies")
def list_strategies_cmd() -> None:
    """List available selection strategies."""
    table = Table(title="Strategies")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for name, cls in sorted(list_strategies().items()):
        table.add_row(name, cls.description)
    console.print(table)
