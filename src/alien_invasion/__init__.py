"""Alien invasion of World X: city graph, alien placement and simulation."""

from .errors import (
    AlienGenerationError,
    InvalidDirectionError,
    InvasionError,
    MapReadError,
    UnknownCityError,
)
from .models import Alien, City, DestructionEvent, Direction, SimulationReport
from .world import DEFAULT_MAX_ITERATIONS, World
from .world_map import MapReadReport, SkippedToken, read_world_map, read_world_map_file

__all__ = [
    "Alien",
    "AlienGenerationError",
    "City",
    "DEFAULT_MAX_ITERATIONS",
    "DestructionEvent",
    "Direction",
    "InvalidDirectionError",
    "InvasionError",
    "MapReadError",
    "MapReadReport",
    "SimulationReport",
    "SkippedToken",
    "UnknownCityError",
    "World",
    "read_world_map",
    "read_world_map_file",
]
