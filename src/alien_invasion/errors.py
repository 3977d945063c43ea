"""Error taxonomy shared by the world model, map reader and CLI."""

from __future__ import annotations


class InvasionError(RuntimeError):
    """Base class for every failure raised by the invasion core."""


class MapReadError(InvasionError):
    """Raised when the underlying map stream cannot be read."""


class UnknownCityError(InvasionError):
    """Raised when an operation references a city that is not part of the world."""

    def __init__(self, city_name: str | None) -> None:
        self.city_name = city_name
        super().__init__(f"City does not exist in this world: {city_name!r}")


class InvalidDirectionError(InvasionError, ValueError):
    """Raised when a connection is requested with a non-compass direction."""

    def __init__(self, direction: object) -> None:
        self.direction = direction
        super().__init__(f"Invalid direction for a connection: {direction!r}")


class AlienGenerationError(InvasionError, ValueError):
    """Raised when aliens cannot be placed, carrying the offending counts."""

    def __init__(self, message: str, *, requested: int, existing: int, available: int) -> None:
        self.requested = requested
        self.existing = existing
        self.available = available
        super().__init__(message)
