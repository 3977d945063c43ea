from __future__ import annotations

import io
import random

from alien_invasion.models import COMPASS, DestructionEvent, Direction
from alien_invasion.rendering import StreamDestructionSink, format_destruction
from alien_invasion.world import World
from alien_invasion.world_map import read_world_map

SAMPLE_MAP = [
    "Zuu south=Zoo",
    "Zoo north=Zuu east=D'Foo",
    "D'Foo east=Baz south=Bar",
    "Bar north=D'Foo south=Guu east=Foo",
    "Guu north=Bar east=Fuu south=P=NP",
    "P=NP north=Guu",
    "Baz west=D'Foo south=Foo east=Qu-ux",
    "Foo north=Baz west=Bar south=Fuu east=Goo",
    "Fuu north=Foo west=Guu",
    "Goo north=Qu-ux west=Foo",
    "Alone",
]


class CollectingSink:
    def __init__(self) -> None:
        self.events: list[DestructionEvent] = []

    def emit(self, event: DestructionEvent) -> None:
        self.events.append(event)


class FirstChoiceRandom:
    """Always takes the first candidate, which makes runs fully predictable."""

    def choice(self, seq):
        return seq[0]

    def sample(self, population, k):
        return list(population)[:k]


def test_two_connected_aliens_destroy_one_city() -> None:
    world = World()
    world.create_city("0")
    world.create_city("1")
    world.generate_aliens(2)
    world.add_connection(world.city("0"), world.city("1"), Direction.NORTH)
    buffer = io.StringIO()

    report = world.run_simulation(StreamDestructionSink(buffer))

    assert buffer.getvalue() in {
        "0 has been destroyed by alien 0 and alien 1\n",
        "0 has been destroyed by alien 1 and alien 0\n",
        "1 has been destroyed by alien 0 and alien 1\n",
        "1 has been destroyed by alien 1 and alien 0\n",
    }
    assert report.cities_destroyed == 1
    assert world.city_count == 1
    assert world.alien_count == 0

    survivor = world.cities()[0]
    assert survivor.name in {"0", "1"}
    assert survivor.is_isolated is True
    assert world.resident(survivor) is None


def test_isolated_alien_stays_trapped() -> None:
    world = World()
    world.create_city("Alone")
    (alien,) = world.generate_aliens(1)

    report = world.run_simulation(iterations=500)

    assert alien.trapped is True
    assert world.location(alien) is world.city("Alone")
    assert world.city_count == 1
    assert world.alien_count == 1
    assert report.events == []
    assert report.trapped_aliens == ["0"]


def test_trapped_alien_never_moves_while_others_wander() -> None:
    world = World(rng=random.Random(11))
    world.create_city("Alone")
    (trapped,) = world.generate_aliens(1)
    read_world_map(world, ["A east=B", "B east=C"])
    (wanderer,) = world.generate_aliens(1)

    visited = set()
    for _ in range(50):
        world.run_simulation(iterations=1)
        assert trapped.trapped is True
        assert world.location(trapped).name == "Alone"
        assert wanderer.trapped is False
        visited.add(world.location(wanderer).name)

    assert visited <= {"A", "B", "C"}
    assert len(visited) > 1


def test_alien_moves_to_empty_neighbor() -> None:
    world = World(rng=FirstChoiceRandom())
    read_world_map(world, ["A east=B"])
    (alien,) = world.generate_aliens(1)
    a, b = world.city("A"), world.city("B")
    assert world.location(alien) is a

    world.run_simulation(iterations=1)

    assert world.location(alien) is b
    assert world.resident(b) is alien
    assert world.resident(a) is None
    assert alien.trapped is False


def test_alien_is_trapped_once_its_neighbors_are_destroyed() -> None:
    world = World(rng=FirstChoiceRandom())
    for name in ("R", "Q", "P"):
        world.create_city(name)
    world.add_connection(world.city("P"), world.city("Q"), Direction.NORTH)
    world.add_connection(world.city("Q"), world.city("R"), Direction.EAST)
    world.generate_aliens(3)
    sink = CollectingSink()

    report = world.run_simulation(sink)

    assert sink.events == [DestructionEvent(city="Q", first_alien="0", second_alien="1")]
    assert format_destruction(sink.events[0]) == "Q has been destroyed by alien 0 and alien 1\n"
    assert world.city("Q") is None
    assert world.city("P").is_isolated is True
    assert world.city("R").is_isolated is True
    assert world.resident(world.city("R")) is None
    assert world.alien("2").trapped is True
    assert world.location(world.alien("2")) is world.city("P")
    assert report.ticks == 1
    assert report.trapped_aliens == ["2"]


def test_self_connected_city_does_not_fight_itself() -> None:
    world = World()
    loop = world.create_city("Loop")
    world.add_connection(loop, loop, Direction.NORTH)
    (alien,) = world.generate_aliens(1)

    report = world.run_simulation(iterations=20)

    assert report.events == []
    assert world.location(alien) is loop
    assert world.alien_count == 1


def test_simulation_keeps_counts_and_graph_consistent() -> None:
    for seed in range(10):
        world = World(rng=random.Random(seed))
        read_world_map(world, SAMPLE_MAP)
        initial_cities = world.city_count
        world.generate_aliens(8)
        sink = CollectingSink()

        report = world.run_simulation(sink)

        destroyed = len(sink.events)
        assert report.events == sink.events
        assert world.alien_count == 8 - 2 * destroyed
        assert world.city_count == initial_cities - destroyed
        for event in sink.events:
            assert world.city(event.city) is None
            assert world.alien(event.first_alien) is None
            assert world.alien(event.second_alien) is None

        for city in world.cities():
            for direction in COMPASS:
                neighbor = world.neighbor(city, direction)
                if neighbor is not None:
                    assert world.neighbor(neighbor, direction.opposite) is city
        for alien in world.aliens():
            location = world.location(alien)
            assert world.resident(location) is alien
            if alien.trapped:
                assert location.is_isolated is True


def test_simulation_with_same_seed_is_reproducible() -> None:
    outputs = []
    for _ in range(2):
        world = World(rng=random.Random(1234))
        read_world_map(world, SAMPLE_MAP)
        world.generate_aliens(6)
        buffer = io.StringIO()
        world.run_simulation(StreamDestructionSink(buffer))
        outputs.append((buffer.getvalue(), str(world)))

    assert outputs[0] == outputs[1]
