import random

import pytest

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.geometry import GridCell
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis
from gridtown.routing import find_path, observe_path, pick_trip
from gridtown.world import World


def _area(x0, y0, x1, y1):
    return GridArea(GridCell(x0, y0), GridCell(x1, y1))


@pytest.fixture
def single_road():
    world = World()
    a = world.spawn(Building(_area(0, 0, 1, 1)))
    b = world.spawn(Building(_area(0, 4, 1, 5)))
    road = world.spawn(RoadSegment(_area(2, 0, 3, 5), GAxis.Z))
    world.get(a, Building).roads.add(road)
    world.get(b, Building).roads.add(road)
    world.get(road, RoadSegment).dests.update({a, b})
    return world, a, b, road


@pytest.fixture
def crossing():
    world = World()
    a = world.spawn(Building(_area(0, 0, 1, 1)))
    b = world.spawn(Building(_area(10, 10, 11, 11)))
    r1 = world.spawn(RoadSegment(_area(2, 0, 3, 5), GAxis.Z))
    inter = world.spawn(Intersection(_area(2, 6, 3, 7)))
    r2 = world.spawn(RoadSegment(_area(4, 6, 9, 7), GAxis.X))
    world.get(a, Building).roads.add(r1)
    world.get(r1, RoadSegment).dests.add(a)
    world.get(r1, RoadSegment).ends[0] = inter
    world.get(inter, Intersection).roads[1] = r1
    world.get(inter, Intersection).roads[2] = r2
    world.get(r2, RoadSegment).ends[1] = inter
    world.get(r2, RoadSegment).dests.add(b)
    world.get(b, Building).roads.add(r2)
    return world, a, b, r1, inter, r2


def test_find_path_along_one_road(single_road):
    world, a, b, road = single_road
    assert find_path(world, a, b, random.Random(1)) == [a, road, b]


def test_find_path_is_symmetric_for_one_road(single_road):
    world, a, b, road = single_road
    assert find_path(world, b, a, random.Random(2)) == [b, road, a]


@pytest.mark.parametrize("seed", range(5))
def test_find_path_through_intersection(crossing, seed):
    world, a, b, r1, inter, r2 = crossing
    assert find_path(world, a, b, random.Random(seed)) == [a, r1, inter, r2, b]


def test_find_path_none_when_disconnected():
    world = World()
    a = world.spawn(Building(_area(0, 0, 1, 1)))
    b = world.spawn(Building(_area(20, 20, 21, 21)))
    road = world.spawn(RoadSegment(_area(2, 0, 3, 5), GAxis.Z))
    world.get(a, Building).roads.add(road)
    world.get(road, RoadSegment).dests.add(a)
    assert find_path(world, a, b, random.Random(0)) is None


def test_find_path_none_when_start_has_no_roads():
    world = World()
    a = world.spawn(Building(_area(0, 0, 1, 1)))
    b = world.spawn(Building(_area(5, 5, 6, 6)))
    assert find_path(world, a, b) is None


def test_find_path_to_itself():
    world = World()
    a = world.spawn(Building(_area(0, 0, 1, 1)))
    assert find_path(world, a, a) == [a]


def test_pick_trip_needs_two_buildings():
    world = World()
    world.spawn(Building(_area(0, 0, 1, 1)))
    assert pick_trip(world, random.Random(0)) is None


def test_pick_trip_returns_distinct_buildings(single_road):
    world, a, b, _ = single_road
    trip = pick_trip(world, random.Random(3))
    assert set(trip) == {a, b}
    assert trip[0] != trip[1]


def test_observe_path_registers_vehicle(crossing):
    world, a, b, r1, inter, r2 = crossing
    observe_path(world, [a, r1, inter, r2, b], "car")
    assert "car" in world.get(a, Building).observers
    assert "car" in world.get(r1, RoadSegment).observers
    assert "car" in world.get(inter, Intersection).observers
    assert "car" in world.get(r2, RoadSegment).observers
    assert "car" in world.get(b, Building).observers


def test_observe_path_ignores_unknown_steps(single_road):
    world, a, b, road = single_road
    observe_path(world, [a, 999], "car")
    assert world.get(a, Building).observers == {"car"}
    assert world.get(road, RoadSegment).observers == set()