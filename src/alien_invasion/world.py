"""World X: the city graph, its alien population and the invasion simulation."""

from __future__ import annotations

import logging
import random

from .arena import Arena, Handle
from .errors import AlienGenerationError, InvalidDirectionError, UnknownCityError
from .models import COMPASS, Alien, City, DestructionEvent, Direction, SimulationReport
from .rendering import DestructionSink, render_world

DEFAULT_MAX_ITERATIONS = 10_000


class World:
    """Owns every city and alien; everything else holds handles into these arenas."""

    def __init__(self, *, rng: random.Random | None = None, logger: logging.Logger | None = None) -> None:
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger("alien_invasion.world")

        self._cities: Arena[City] = Arena()
        self._aliens: Arena[Alien] = Arena()
        self._city_index: dict[str, Handle] = {}
        self._alien_index: dict[str, Handle] = {}
        self._aliens_placed = 0

    def __str__(self) -> str:
        return render_world(self)

    @property
    def city_count(self) -> int:
        return len(self._city_index)

    @property
    def alien_count(self) -> int:
        return len(self._alien_index)

    def city(self, name: str) -> City | None:
        return self._cities.get(self._city_index.get(name))

    def alien(self, name: str) -> Alien | None:
        return self._aliens.get(self._alien_index.get(name))

    def cities(self) -> list[City]:
        """Live cities in the order they were first mentioned."""
        return [self._cities[handle] for handle in self._city_index.values()]

    def aliens(self) -> list[Alien]:
        return [self._aliens[handle] for handle in self._alien_index.values()]

    def neighbor(self, city: City, direction: Direction) -> City | None:
        return self._cities.get(city.connection(direction))

    def neighbors(self, city: City) -> dict[Direction, City]:
        connected: dict[Direction, City] = {}
        for direction in COMPASS:
            neighbor = self._cities.get(city.neighbors[direction.slot])
            if neighbor is not None:
                connected[direction] = neighbor
        return connected

    def resident(self, city: City) -> Alien | None:
        return self._aliens.get(city.resident)

    def location(self, alien: Alien) -> City | None:
        return self._cities.get(alien.location)

    def create_city(self, name: str) -> City:
        """Return the city called ``name``, creating an isolated one if needed."""
        existing = self.city(name)
        if existing is not None:
            return existing

        city = City(name=name)
        self._city_index[name] = self._cities.insert(city)
        self._logger.debug("city_created", extra={"city": name})
        return city

    def add_connection(self, city_a: City | None, city_b: City | None, direction: Direction) -> None:
        """Connect ``city_a`` to ``city_b`` in ``direction`` and ``city_b`` back in the opposite one.

        Any edge previously held by either slot is severed on both ends so the
        graph stays symmetric. Aliens living in either city are released from
        the trapped state since they now have somewhere to go.
        """
        handle_a = self._require_city(city_a)
        handle_b = self._require_city(city_b)
        if not direction.is_valid:
            raise InvalidDirectionError(direction)
        reverse = direction.opposite

        self._sever(city_a, direction)
        self._sever(city_b, reverse)
        city_a.neighbors[direction.slot] = handle_b
        city_b.neighbors[reverse.slot] = handle_a

        for city in (city_a, city_b):
            alien = self.resident(city)
            if alien is not None and alien.trapped:
                alien.trapped = False

    def generate_aliens(self, count: int, *, rng: random.Random | None = None) -> list[Alien]:
        """Place ``count`` new aliens, each in a uniformly random empty city.

        Aliens are named by their placement index. Raises
        ``AlienGenerationError`` without touching the world when ``count`` is not
        positive or the world has fewer free cities than requested.
        """
        existing, available = self.alien_count, self.city_count
        if count <= 0:
            raise AlienGenerationError(
                f"The number of aliens to generate must be positive, got {count}.",
                requested=count,
                existing=existing,
                available=available,
            )
        if existing + count > available:
            raise AlienGenerationError(
                "Cannot have more aliens in the world than cities: "
                f"requested {count} + existing {existing} > cities {available}.",
                requested=count,
                existing=existing,
                available=available,
            )

        rng = rng or self._rng
        empty = [handle for handle in self._city_index.values() if self._cities[handle].is_empty]
        placed: list[Alien] = []
        for city_handle in rng.sample(empty, count):
            city = self._cities[city_handle]
            alien = Alien(name=str(self._aliens_placed), location=city_handle, trapped=city.is_isolated)
            alien_handle = self._aliens.insert(alien)
            self._alien_index[alien.name] = alien_handle
            city.resident = alien_handle
            self._aliens_placed += 1
            placed.append(alien)

        self._logger.info(
            "aliens_generated",
            extra={"count": count, "trapped": sum(alien.trapped for alien in placed), "cities": available},
        )
        return placed

    def run_simulation(
        self,
        sink: DestructionSink | None = None,
        *,
        iterations: int = DEFAULT_MAX_ITERATIONS,
        rng: random.Random | None = None,
    ) -> SimulationReport:
        """Move every alien once per tick for ``iterations`` ticks.

        Two aliens meeting in a city destroy it and themselves; each destruction
        is sent to ``sink`` as it happens. The run stops before the budget only
        when no alien is left that could still move.
        """
        rng = rng or self._rng
        report = SimulationReport()
        self._logger.info(
            "simulation_started",
            extra={"iterations": iterations, "aliens": self.alien_count, "cities": self.city_count},
        )

        for _ in range(iterations):
            if not any(not alien.trapped for alien in self.aliens()):
                break
            report.ticks += 1
            for handle in self._aliens.handles():
                alien = self._aliens.get(handle)
                # Destroyed earlier in this tick.
                if alien is None:
                    continue
                event = self._move_alien(alien, rng)
                if event is not None:
                    report.events.append(event)
                    if sink is not None:
                        sink.emit(event)

        report.trapped_aliens = [alien.name for alien in self.aliens() if alien.trapped]
        self._logger.info(
            "simulation_finished",
            extra={
                "ticks": report.ticks,
                "cities_destroyed": report.cities_destroyed,
                "aliens_left": self.alien_count,
                "cities_left": self.city_count,
            },
        )
        return report

    def _move_alien(self, alien: Alien, rng: random.Random) -> DestructionEvent | None:
        if alien.trapped:
            return None

        current = self._cities[alien.location]
        destination = self._random_connection(current, rng)
        if destination is None:
            alien.trapped = True
            self._logger.debug("alien_trapped", extra={"alien": alien.name, "city": current.name})
            return None

        target = self._cities[destination]
        defender = self.resident(target)
        # A city connected to itself: the alien stays put.
        if defender is alien:
            return None
        if defender is not None:
            event = DestructionEvent(city=target.name, first_alien=alien.name, second_alien=defender.name)
            self._destroy_city(destination, alien, defender)
            return event

        current.resident = None
        target.resident = self._alien_index[alien.name]
        alien.location = destination
        if target.is_isolated:
            alien.trapped = True
            self._logger.debug("alien_trapped", extra={"alien": alien.name, "city": target.name})
        return None

    def _random_connection(self, city: City, rng: random.Random) -> Handle | None:
        connections = [handle for handle in city.neighbors if handle is not None]
        if not connections:
            return None
        return rng.choice(connections)

    def _destroy_city(self, handle: Handle, *aliens: Alien) -> None:
        for alien in aliens:
            self._remove_alien(alien)

        city = self._cities.remove(handle)
        for direction in COMPASS:
            neighbor = self._cities.get(city.neighbors[direction.slot])
            if neighbor is not None:
                neighbor.neighbors[direction.opposite.slot] = None
            city.neighbors[direction.slot] = None
        del self._city_index[city.name]

        self._logger.info(
            "city_destroyed",
            extra={"city": city.name, "aliens": [alien.name for alien in aliens]},
        )

    def _remove_alien(self, alien: Alien) -> None:
        location = self._cities.get(alien.location)
        if location is not None:
            location.resident = None
        alien.location = None
        self._aliens.remove(self._alien_index.pop(alien.name))

    def _sever(self, city: City, direction: Direction) -> None:
        neighbor = self._cities.get(city.neighbors[direction.slot])
        if neighbor is not None and self._cities.get(neighbor.neighbors[direction.opposite.slot]) is city:
            neighbor.neighbors[direction.opposite.slot] = None
        city.neighbors[direction.slot] = None

    def _require_city(self, city: City | None) -> Handle:
        if city is None:
            raise UnknownCityError(None)
        handle = self._city_index.get(city.name)
        if handle is None or self._cities.get(handle) is not city:
            raise UnknownCityError(city.name)
        return handle
