"""Finding paths for vehicles through the road graph."""

from __future__ import annotations

import random
from collections.abc import Hashable

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.world import World


def find_path(
    world: World, start: Hashable, end: Hashable, rng: random.Random | None = None
) -> list[Hashable] | None:
    """A path of entities from building ``start`` to building ``end``, or None if none is found.

    The search is depth first and visits the ends of roads and the roads of
    intersections in random order, so repeated calls may find different routes.
    """
    rng = rng if rng is not None else random.Random()
    frontier: list[Hashable] = [start]
    visited: set[Hashable] = set()
    parent: dict[Hashable, Hashable] = {}
    found = False

    while frontier:
        curr = frontier.pop()
        visited.add(curr)

        building = world.get(curr, Building)
        if building is not None:
            if curr == end:
                found = True
                break
            if building.roads:
                road = next(iter(building.roads))
                frontier.append(road)
                parent[road] = curr
            continue

        segment = world.get(curr, RoadSegment)
        if segment is not None:
            if end in segment.dests:
                frontier.append(end)
                parent[end] = curr
            else:
                order = [0, 1]
                rng.shuffle(order)
                for slot in order:
                    inter = segment.ends[slot]
                    if inter is not None and world.contains(inter, Intersection) and inter not in visited:
                        frontier.append(inter)
                        parent[inter] = curr
            continue

        intersection = world.get(curr, Intersection)
        if intersection is not None:
            choices = list(intersection.roads)
            rng.shuffle(choices)
            for road in choices:
                if road is not None and road not in visited:
                    frontier.append(road)
                    parent[road] = curr

    if not found:
        return None

    path: list[Hashable] = []
    curr = end
    while curr != start:
        path.append(curr)
        if curr not in parent or len(path) > len(parent):
            return None
        curr = parent[curr]
    path.append(start)
    path.reverse()
    return path


def pick_trip(world: World, rng: random.Random | None = None) -> tuple[Hashable, Hashable] | None:
    """Two distinct buildings in random order, or None when there are fewer than two."""
    rng = rng if rng is not None else random.Random()
    buildings = [entity for entity, _ in world.of_type(Building)]
    if len(buildings) < 2:
        return None
    first, second = rng.sample(buildings, 2)
    return first, second


def observe_path(world: World, path: list[Hashable], vehicle: Hashable) -> None:
    """Register ``vehicle`` with every place on ``path`` so it is removed if one is destroyed."""
    for step in path:
        for kind in (Building, RoadSegment, Intersection):
            component = world.get(step, kind)
            if component is not None:
                component.observers.add(vehicle)
                break