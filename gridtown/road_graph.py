"""Links between roads, intersections and buildings that share a border."""

from __future__ import annotations

from collections.abc import Hashable
from enum import Enum

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.grid import Grid, GridBoundsError
from gridtown.world import World


class GraphVisualizationState(Enum):
    VISUALIZE = "Visualize"
    HIDE = "Hide"

    @classmethod
    def default(cls) -> GraphVisualizationState:
        return cls.HIDE

    def toggled(self) -> GraphVisualizationState:
        return GraphVisualizationState.HIDE if self is GraphVisualizationState.VISUALIZE else GraphVisualizationState.VISUALIZE


def add_road_to_graph(world: World, grid: Grid, entity: Hashable) -> None:
    """Link a newly placed road to the intersections and buildings beside it."""
    segment = world.get(entity, RoadSegment)
    if segment is None:
        return

    for adj_area, gdir in segment.area.adjacent_areas():
        adjacent = grid.single_entity_in_area(adj_area)
        if adjacent is not None:
            inter = world.get(adjacent, Intersection)
            if inter is not None:
                segment.ends[gdir.binary_index()] = adjacent
                inter.roads[gdir.inverse().index()] = entity

        for cell in adj_area:
            try:
                occupant = grid.entity_at(cell)
            except GridBoundsError:
                continue
            if occupant is None:
                continue
            building = world.get(occupant, Building)
            if building is not None:
                segment.dests.add(occupant)
                building.roads.add(entity)


def add_intersection_to_graph(world: World, grid: Grid, entity: Hashable) -> None:
    """Link a newly placed intersection to the roads that fully border it."""
    inter = world.get(entity, Intersection)
    if inter is None:
        return

    for adj_area, gdir in inter.area.adjacent_areas():
        adjacent = grid.single_entity_in_area(adj_area)
        if adjacent is None:
            continue
        segment = world.get(adjacent, RoadSegment)
        if segment is not None:
            inter.roads[gdir.index()] = adjacent
            segment.ends[gdir.inverse().binary_index()] = entity


def add_building_to_graph(world: World, grid: Grid, entity: Hashable) -> None:
    """Link a newly placed building to the roads that fully border it."""
    building = world.get(entity, Building)
    if building is None:
        return

    for adj_area, _ in building.area.adjacent_areas():
        adjacent = grid.single_entity_in_area(adj_area)
        if adjacent is None:
            continue
        segment = world.get(adjacent, RoadSegment)
        if segment is not None:
            building.roads.add(adjacent)
            segment.dests.add(entity)


def remove_road_from_graph(world: World, entity: Hashable) -> None:
    """Drop every link that points at a road about to be destroyed."""
    segment = world.get(entity, RoadSegment)
    if segment is None:
        return

    for end in segment.ends:
        if end is None:
            continue
        inter = world.get(end, Intersection)
        if inter is not None:
            inter.roads = [None if road == entity else road for road in inter.roads]

    for dest in segment.dests:
        building = world.get(dest, Building)
        if building is not None:
            building.roads.discard(entity)


def remove_intersection_from_graph(world: World, entity: Hashable) -> None:
    """Drop every link that points at an intersection about to be destroyed."""
    inter = world.get(entity, Intersection)
    if inter is None:
        return

    for road in inter.roads:
        if road is None:
            continue
        segment = world.get(road, RoadSegment)
        if segment is not None:
            segment.ends = [None if end == entity else end for end in segment.ends]


def remove_building_from_graph(world: World, entity: Hashable) -> None:
    """Drop every link that points at a building about to be destroyed."""
    building = world.get(entity, Building)
    if building is None:
        return

    for road in building.roads:
        segment = world.get(road, RoadSegment)
        if segment is not None:
            segment.dests.discard(entity)