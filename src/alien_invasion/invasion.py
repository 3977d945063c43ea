"""End-to-end invasion run: read the map, land the aliens, simulate."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path

from .models import SimulationReport
from .rendering import DestructionSink
from .world import DEFAULT_MAX_ITERATIONS, World
from .world_map import MapReadReport, read_world_map_file


@dataclass(slots=True)
class InvasionOutcome:
    world: World
    map_report: MapReadReport
    simulation: SimulationReport


def prepare_invasion(
    map_path: str | Path,
    number_aliens: int,
    *,
    rng: random.Random | None = None,
    logger: logging.Logger | None = None,
) -> tuple[World, MapReadReport]:
    """Read the map and land the aliens; nothing has moved yet."""
    world = World(rng=rng, logger=logger)
    map_report = read_world_map_file(world, map_path)
    world.generate_aliens(number_aliens)
    return world, map_report


def invade(
    map_path: str | Path,
    number_aliens: int,
    *,
    sink: DestructionSink | None = None,
    iterations: int = DEFAULT_MAX_ITERATIONS,
    rng: random.Random | None = None,
    logger: logging.Logger | None = None,
) -> InvasionOutcome:
    """Build World X from ``map_path`` and let ``number_aliens`` loose on it."""
    world, map_report = prepare_invasion(map_path, number_aliens, rng=rng, logger=logger)
    simulation = world.run_simulation(sink, iterations=iterations)
    return InvasionOutcome(world=world, map_report=map_report, simulation=simulation)
