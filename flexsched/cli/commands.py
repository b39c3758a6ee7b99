"""CLI commands for flexsched."""

from datetime import datetime, timezone
from pathlib import Path
import random
from typing import NoReturn

import typer
import yaml
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flexsched import __logo__, __version__
from flexsched.config.schema import SchedulerSettings
from flexsched.frequency.types import ConfigurationError, FrequencyConfig

app = typer.Typer(
    name="flexsched",
    help=f"{__logo__} flexsched - flexible recurrence scheduling",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} flexsched v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show flexsched debug logs"),
):
    """flexsched - flexible recurrence scheduling."""
    if verbose:
        logger.enable("flexsched")
    else:
        logger.disable("flexsched")


# ============================================================================
# Helpers
# ============================================================================


def _load_frequency_file(path: Path) -> FrequencyConfig:
    """Read a YAML or JSON frequency file, optionally nested under `frequency:`."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"cannot read {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML in {path}") from e

    if isinstance(payload, dict) and isinstance(payload.get("frequency"), dict):
        payload = payload["frequency"]
    return FrequencyConfig.from_dict(payload)


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    text = value.strip()
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(f"invalid --now datetime '{value}'") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _resolve_settings(tz: str | None = None, locale: str | None = None) -> SchedulerSettings:
    """Load settings from disk and apply command-line overrides."""
    from flexsched.config.loader import load_settings

    settings = load_settings()
    overrides = {}
    if tz:
        overrides["timezone"] = tz
    if locale:
        overrides["locale"] = locale
    if not overrides:
        return settings
    try:
        return SchedulerSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        messages = [err["msg"].removeprefix("Value error, ") for err in e.errors()]
        raise ValueError("; ".join(messages)) from None


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


# ============================================================================
# Setup
# ============================================================================


@app.command()
def init():
    """Create the settings file with defaults."""
    from flexsched.config.loader import get_config_path, load_settings, save_settings

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Settings already exist at {config_path}[/yellow]")
        if typer.confirm("Overwrite with defaults?"):
            save_settings(SchedulerSettings())
            console.print(f"[green]✓[/green] Settings reset to defaults at {config_path}")
        else:
            save_settings(load_settings())
            console.print(f"[green]✓[/green] Settings refreshed at {config_path} (existing values preserved)")
    else:
        save_settings(SchedulerSettings())
        console.print(f"[green]✓[/green] Created settings at {config_path}")


# ============================================================================
# Frequency Commands
# ============================================================================


@app.command()
def presets(
    locale: str = typer.Option(None, "--locale", help="Language for formatted frequencies (en, fr)"),
):
    """List built-in frequency presets."""
    from flexsched.frequency.format import format_frequency_config
    from flexsched.frequency.presets import FREQUENCY_PRESETS

    try:
        settings = _resolve_settings(locale=locale)
    except ValueError as e:
        _fail(str(e))

    table = Table(title="Frequency Presets")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Frequency")
    table.add_column("Description", style="dim")

    for preset in FREQUENCY_PRESETS:
        table.add_row(
            preset.id,
            preset.label,
            format_frequency_config(preset.config, settings.locale),
            preset.description,
        )

    console.print(table)


@app.command()
def validate(
    path: Path = typer.Argument(..., help="YAML or JSON frequency file"),
):
    """Validate a frequency file and list every problem found."""
    from flexsched.frequency.format import format_frequency_config
    from flexsched.frequency.validation import validate_frequency_config

    try:
        settings = _resolve_settings()
        config = _load_frequency_file(path)
    except ConfigurationError as e:
        errors = e.errors
    except ValueError as e:
        _fail(str(e))
    else:
        result = validate_frequency_config(config)
        if result.valid:
            console.print(
                f"[green]✓[/green] Valid: {escape(format_frequency_config(config, settings.locale))}"
            )
            return
        errors = result.errors

    console.print(f"[red]Invalid frequency configuration ({len(errors)} error(s)):[/red]")
    for error in errors:
        console.print(f"  - {escape(error)}")
    raise typer.Exit(1)


@app.command("next")
def next_runs(
    path: Path = typer.Argument(None, help="YAML or JSON frequency file"),
    preset: str = typer.Option(None, "--preset", "-p", help="Use a built-in preset instead of a file"),
    count: int = typer.Option(None, "--count", "-n", help="Number of upcoming runs to show"),
    now: str = typer.Option(None, "--now", help="Reference time (ISO format, default: now)"),
    seed: int = typer.Option(None, "--seed", help="Seed the random source for reproducible output"),
    tz: str | None = typer.Option(None, "--tz", help="IANA timezone (e.g. 'Europe/Paris')"),
    locale: str = typer.Option(None, "--locale", help="Language for descriptions (en, fr)"),
):
    """Preview the next runs of a frequency."""
    from flexsched.frequency.calculator import preview_runs
    from flexsched.frequency.format import format_duration, format_frequency_config
    from flexsched.frequency.presets import get_preset
    from flexsched.frequency.windows import resolve_timezone, to_local

    if (path is None) == (preset is None):
        _fail("Must specify a FILE or --preset (not both)")

    try:
        settings = _resolve_settings(tz=tz, locale=locale)
        if preset is not None:
            config = get_preset(preset).config
        else:
            config = _load_frequency_file(path)
        results = preview_runs(
            config,
            _parse_now(now),
            count if count is not None else settings.preview_count,
            rng=random.Random(seed) if seed is not None else None,
            tz=settings.timezone,
            locale=settings.locale,
        )
    except KeyError as e:
        _fail(str(e.args[0]))
    except ValueError as e:
        _fail(str(e))

    zone = resolve_timezone(settings.timezone)
    table = Table(title=f"Upcoming runs: {escape(format_frequency_config(config, settings.locale))}")
    table.add_column("#", justify="right")
    table.add_column(f"Next Run ({settings.timezone})", style="cyan")
    table.add_column("Description")
    table.add_column("After", justify="right")

    for index, result in enumerate(results, start=1):
        local = to_local(result.next_run_at, zone)
        table.add_row(
            str(index),
            local.strftime("%Y-%m-%d %H:%M"),
            result.description,
            format_duration(result.delay_ms // 60_000),
        )

    console.print(table)
