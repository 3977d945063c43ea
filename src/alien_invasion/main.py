"""CLI entrypoint for the invasion simulator."""

from __future__ import annotations

import random
import sys
from contextlib import nullcontext
from pathlib import Path

import typer
from rich.console import Console

from alien_invasion.config import settings
from alien_invasion.errors import InvasionError
from alien_invasion.invasion import prepare_invasion
from alien_invasion.rendering import StreamDestructionSink, render_world
from alien_invasion.telemetry import configure_logging

app = typer.Typer(
    help="Read World X, simulate an alien invasion and print what is left of the world.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)


def _resolve_map_path(map_file: Path | None) -> Path:
    path = map_file or Path(settings.default_map_path)
    if not path.exists():
        raise typer.BadParameter(f"{path}: no such file.", param_hint="FILE")
    if path.is_dir():
        raise typer.BadParameter(
            f"{path}: is a directory, should be a file with the description of the world map.",
            param_hint="FILE",
        )
    return path


@app.command()
def run(
    number_aliens: int = typer.Argument(
        None,
        help="Number of alien invaders, defaults to INVASION_DEFAULT_ALIENS (10).",
        show_default=False,
    ),
    map_file: Path = typer.Argument(
        None,
        help="World map file, defaults to INVASION_DEFAULT_MAP_PATH (maps/world_map).",
        show_default=False,
    ),
    output: Path = typer.Option(None, "--output", "-o", help="Write events and the final map here instead of stdout."),
    seed: int = typer.Option(None, help="Seed the random source for a reproducible run."),
    iterations: int = typer.Option(None, min=1, help="Tick budget, defaults to INVASION_MAX_ITERATIONS."),
    log_level: str = typer.Option(None, help="Logging level, defaults to INVASION_LOG_LEVEL."),
) -> None:
    """Invade World X with N aliens."""
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    count = settings.default_aliens if number_aliens is None else number_aliens
    path = _resolve_map_path(map_file)
    effective_seed = seed if seed is not None else settings.seed
    rng = random.Random(effective_seed)

    try:
        world, map_report = prepare_invasion(path, count, rng=rng)
    except InvasionError as exc:
        err_console.print(f"error: {exc}", style="bold red", markup=False)
        raise typer.Exit(code=1)

    err_console.print(
        f"{settings.app_name}: World X is invaded by {count} aliens ({path}).",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    target = output.open("w", encoding="utf-8") if output else nullcontext(sys.stdout)
    with target as stream:
        simulation = world.run_simulation(
            StreamDestructionSink(stream),
            iterations=iterations or settings.max_iterations,
        )
        stream.write(render_world(world))

    err_console.print(
        f"{simulation.cities_destroyed} cities destroyed, "
        f"{world.city_count} cities and {world.alien_count} aliens left "
        f"after {simulation.ticks} ticks.",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    if map_report.skipped:
        err_console.print(f"{len(map_report.skipped)} map tokens were skipped.", style="yellow")


if __name__ == "__main__":
    app()
