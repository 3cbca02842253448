"""Image resize CLI application.

This module provides the command-line interface for the resizer:
computing target sizes, resizing files or URLs, benchmarking the resize
variants, and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from jpegresize.benchmark.models import VARIANTS
from jpegresize.common.enums import OutputFormat, ResamplingProfile
from jpegresize.controller import ResizeController
from jpegresize.imaging.dimensions import compute_target_size
from jpegresize.imaging.errors import InvalidDimensionsError, ResizeError
from jpegresize.settings.user import UserSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Scale-to-fit image resizer", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "jpegresize.cli"

# Options shared by several commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
WIDTH_OPTION = typer.Option(None, "--width", "-W", min=1, help="Maximum output width")
HEIGHT_OPTION = typer.Option(
    None, "--height", "-H", min=0, help="Maximum output height (0 = fit width only)"
)
PROFILE_OPTION = typer.Option(None, "--profile", "-p", help="Resampling profile")
QUALITY_OPTION = typer.Option(None, "--quality", "-q", min=1, max=100, help="Encoder quality")
FORMAT_OPTION = typer.Option(None, "--format", "-f", help="Output format")
HEIC_OPTION = typer.Option(False, "--heic", help="Decode the input as HEIC/HEIF")
SOURCE_ARGUMENT = typer.Argument(..., help="Input file path or http(s) URL")
OUTPUT_ARGUMENT = typer.Argument(None, help="Output file (default: output_dir/<name>_resized)")
VARIANT_OPTION = typer.Option(
    None, "--variant", "-v", help=f"Variant(s) to run: {', '.join(VARIANTS)} (default: all)"
)
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _load_settings(config: Path | None, **overrides: Any) -> UserSettings:
    """Load settings and apply command-line overrides that were given."""
    try:
        settings = UserSettings.load(config)
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return settings
        return UserSettings.model_validate({**settings.model_dump(), **updates})
    except (FileNotFoundError, RuntimeError) as exc:
        raise _fail(str(exc)) from exc
    except ValidationError as exc:
        raise _fail(f"Invalid options:\n{exc}") from exc


@app.command()
def size(
    source_width: int = typer.Argument(..., help="Source width in pixels"),
    source_height: int = typer.Argument(..., help="Source height in pixels"),
    width: int = typer.Option(..., "--width", "-W", min=1, help="Maximum output width"),
    height: int = typer.Option(0, "--height", "-H", min=0, help="Maximum output height"),
) -> None:
    """Print the scale-to-fit target size for a source and bounding box."""
    try:
        target_width, target_height = compute_target_size(
            source_width, source_height, width, height
        )
    except InvalidDimensionsError as exc:
        raise _fail(str(exc)) from exc
    typer.echo(f"{target_width}x{target_height}")


@app.command()
def resize(
    source: str = SOURCE_ARGUMENT,
    output: Path | None = OUTPUT_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    width: int | None = WIDTH_OPTION,
    height: int | None = HEIGHT_OPTION,
    profile: ResamplingProfile | None = PROFILE_OPTION,
    quality: int | None = QUALITY_OPTION,
    output_format: OutputFormat | None = FORMAT_OPTION,
    heic: bool = HEIC_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Resize one image to fit the bounding box."""
    settings = _load_settings(
        config,
        desired_width=width,
        desired_height=height,
        profile=profile,
        quality=quality,
        output_format=output_format,
        heic=heic or None,
    )
    controller = ResizeController(settings=settings, debug=debug)
    try:
        out_path = controller.resize_file(source, output)
    except ResizeError as exc:
        raise _fail(str(exc)) from exc
    typer.echo(str(out_path))


@app.command()
def bench(
    source: str = SOURCE_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    width: int | None = WIDTH_OPTION,
    height: int | None = HEIGHT_OPTION,
    iterations: int | None = typer.Option(None, "--iterations", "-n", min=1),
    warmup: int | None = typer.Option(None, "--warmup", min=0),
    workers: int | None = typer.Option(None, "--workers", "-j", min=1, max=64),
    isolate_memory: bool | None = typer.Option(
        None,
        "--isolate-memory/--in-process-memory",
        help="Sample memory in a fresh interpreter per variant",
    ),
    variant: list[str] | None = VARIANT_OPTION,
    heic: bool = HEIC_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Benchmark the resize variants on one source image."""
    settings = _load_settings(
        config,
        bench_width=width,
        bench_height=height,
        bench_iterations=iterations,
        bench_warmup=warmup,
        bench_workers=workers,
        bench_isolate_memory=isolate_memory,
        heic=heic or None,
    )
    controller = ResizeController(settings=settings, debug=debug)
    try:
        results = controller.benchmark(source, variant)
    except (ResizeError, ValueError) as exc:
        raise _fail(str(exc)) from exc

    for result in results:
        typer.echo(result.summary_line())


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "desired_width": typer.prompt("Maximum width", default="500"),
            "desired_height": typer.prompt("Maximum height (0 = fit width only)", default="500"),
            "profile": typer.prompt("Profile [high-quality|high-speed]", default="high-quality"),
            "output_format": typer.prompt("Format [jpeg|png|webp|source]", default="jpeg"),
            "quality": typer.prompt("Quality 1-100", default="85"),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
