from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .arena import Handle
from .errors import InvalidDirectionError


class Direction(str, Enum):
    """Compass directions a city can be connected in."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> Direction:
        """Map a map-file token to a direction; anything unrecognised is ``UNKNOWN``."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_valid(self) -> bool:
        return self is not Direction.UNKNOWN

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES.get(self, Direction.UNKNOWN)

    @property
    def slot(self) -> int:
        """Index of this direction in a city's neighbor table."""
        try:
            return _SLOTS[self]
        except KeyError:
            raise InvalidDirectionError(self) from None


COMPASS: tuple[Direction, ...] = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)

_SLOTS = {direction: index for index, direction in enumerate(COMPASS)}
_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


def _empty_neighbor_table() -> list[Handle | None]:
    return [None] * len(COMPASS)


@dataclass(slots=True, eq=False)
class City:
    """Named node of the world graph.

    ``neighbors`` is indexed by ``Direction.slot``; both the neighbor slots and
    ``resident`` are non-owning handles resolved through the owning ``World``.
    """

    name: str
    neighbors: list[Handle | None] = field(default_factory=_empty_neighbor_table)
    resident: Handle | None = None

    def connection(self, direction: Direction) -> Handle | None:
        return self.neighbors[direction.slot]

    def connected_directions(self) -> list[Direction]:
        return [direction for direction in COMPASS if self.neighbors[direction.slot] is not None]

    @property
    def is_isolated(self) -> bool:
        return all(handle is None for handle in self.neighbors)

    @property
    def is_empty(self) -> bool:
        return self.resident is None


@dataclass(slots=True, eq=False)
class Alien:
    name: str
    location: Handle | None = None
    trapped: bool = False


@dataclass(frozen=True, slots=True)
class DestructionEvent:
    """A city destroyed by the two aliens that fought inside it."""

    city: str
    first_alien: str
    second_alien: str


@dataclass(slots=True)
class SimulationReport:
    ticks: int = 0
    events: list[DestructionEvent] = field(default_factory=list)
    trapped_aliens: list[str] = field(default_factory=list)

    @property
    def cities_destroyed(self) -> int:
        return len(self.events)
