"""Reader for the line-oriented World X map format.

Each line is ``<City> [<direction>=<City>]*``. Malformed, duplicate and
conflicting direction tokens are skipped without failing the read; they are
recorded on the returned ``MapReadReport`` and logged at DEBUG level.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .errors import MapReadError
from .models import City, Direction
from .world import World

DIRECTION_SEPARATOR = "="

_LOGGER = logging.getLogger("alien_invasion.world_map")


@dataclass(frozen=True, slots=True)
class SkippedToken:
    line_number: int
    token: str
    reason: str


@dataclass(slots=True)
class MapReadReport:
    lines_read: int = 0
    connections_created: int = 0
    skipped: list[SkippedToken] = field(default_factory=list)


def read_world_map(
    world: World,
    lines: Iterable[str],
    *,
    logger: logging.Logger | None = None,
) -> MapReadReport:
    """Populate ``world`` from map lines; stream failures raise ``MapReadError``."""
    logger = logger or _LOGGER
    report = MapReadReport()
    try:
        for line_number, line in enumerate(lines, start=1):
            report.lines_read = line_number
            _read_line(world, line, line_number, report, logger)
    except (OSError, UnicodeDecodeError) as exc:
        raise MapReadError(f"Failed to read world map after {report.lines_read} lines: {exc}") from exc

    logger.info(
        "world_map_read",
        extra={
            "lines": report.lines_read,
            "cities": world.city_count,
            "connections": report.connections_created,
            "skipped_tokens": len(report.skipped),
        },
    )
    return report


def read_world_map_file(world: World, path: str | Path, *, logger: logging.Logger | None = None) -> MapReadReport:
    map_path = Path(path)
    try:
        with map_path.open("r", encoding="utf-8") as handle:
            return read_world_map(world, handle, logger=logger)
    except OSError as exc:
        raise MapReadError(f"Unable to open world map {map_path}: {exc}") from exc


def _read_line(world: World, line: str, line_number: int, report: MapReadReport, logger: logging.Logger) -> None:
    tokens = line.split()
    if not tokens:
        return

    origin = world.create_city(tokens[0])
    for token in tokens[1:]:
        created, reason = _connect(world, origin, token)
        if created:
            report.connections_created += 1
        if reason is None:
            continue
        report.skipped.append(SkippedToken(line_number=line_number, token=token, reason=reason))
        logger.debug(
            "map_token_skipped",
            extra={"line_number": line_number, "token": token, "reason": reason},
        )


def _connect(world: World, origin: City, token: str) -> tuple[bool, str | None]:
    """Apply ``token`` to ``origin``.

    Returns whether a connection was created and, for skipped tokens, why.
    Restating an edge that already exists (``Bar south=Foo`` after
    ``Foo north=Bar``) is neither.
    """
    direction_name, separator, target_name = token.partition(DIRECTION_SEPARATOR)
    if not separator:
        return False, "missing separator"
    if not target_name:
        return False, "empty city name"

    direction = Direction.parse(direction_name)
    if not direction.is_valid:
        return False, "unknown direction"

    existing = world.neighbor(origin, direction)
    if existing is not None:
        if existing.name == target_name:
            return False, None
        return False, "duplicate direction"

    target = world.create_city(target_name)
    back_link = world.neighbor(target, direction.opposite)
    if back_link is not None and back_link is not origin:
        return False, "conflicting connection"

    world.add_connection(origin, target, direction)
    return True, None
