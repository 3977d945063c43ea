"""Text formats for the rendered world and destruction events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TextIO

from .models import City, DestructionEvent

if TYPE_CHECKING:
    from .world import World


class DestructionSink(Protocol):
    """Receives destruction events as the simulation produces them."""

    def emit(self, event: DestructionEvent) -> None:
        """Publish one destruction event."""


def format_destruction(event: DestructionEvent) -> str:
    return f"{event.city} has been destroyed by alien {event.first_alien} and alien {event.second_alien}\n"


def describe_city(world: World, city: City) -> str:
    """``<name> <dir>=<neighbor> ...`` for every occupied slot, in compass order."""
    parts = [city.name]
    for direction, neighbor in world.neighbors(city).items():
        parts.append(f"{direction.value}={neighbor.name}")
    return " ".join(parts)


def render_world(world: World) -> str:
    return "".join(describe_city(world, city) + "\n" for city in world.cities())


class StreamDestructionSink:
    """Writes each event to a text stream the moment it happens."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def emit(self, event: DestructionEvent) -> None:
        self._stream.write(format_destruction(event))
        self._stream.flush()
