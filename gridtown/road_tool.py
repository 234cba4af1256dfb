"""The road painting tool and the road edits it asks for."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from gridtown.components import RoadSegment
from gridtown.events import (
    RequestIntersection,
    RequestRoad,
    RequestRoadBridge,
    RequestRoadExtend,
    RequestRoadSplit,
)
from gridtown.geometry import GridCell, Vec3
from gridtown.grid import Grid
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis
from gridtown.world import World

ROAD_HEIGHT = 0.05
ROAD_TEXTURE_STRETCH = 5.0


def road_texture(width: int) -> str:
    """Texture for a road that is ``width`` cells wide."""
    if width == 6:
        return "textures/three_lanes.png"
    if width == 4:
        return "textures/two_lanes.png"
    return "textures/one_lane.png"


@dataclass
class RoadTool:
    """Paints straight roads by dragging between two points on the ground."""

    width: int = 2
    ground_position: Vec3 = field(default_factory=Vec3)
    drag_start_ground_position: Vec3 = field(default_factory=Vec3)
    dragging: bool = False
    drag_area: GridArea = field(default_factory=lambda: GridArea.at(Vec3(), 0, 0))
    orientation: GAxis = GAxis.Z

    def _strip_at(self, position: Vec3) -> GridArea:
        if self.orientation is GAxis.Z:
            return GridArea.at(position, self.width, 1)
        return GridArea.at(position, 1, self.width)

    def area(self) -> GridArea:
        """The area the tool currently covers."""
        if self.dragging:
            return self.drag_start_area().union(self.drag_end_area())
        return self.hover_area()

    def drag_start_area(self) -> GridArea:
        return self._strip_at(self.drag_start_ground_position)

    def drag_end_area(self) -> GridArea:
        """The end of the drag, kept in line with its start along the road's axis."""
        start = self.drag_start_ground_position
        if self.orientation is GAxis.Z:
            return self._strip_at(self.ground_position.with_x(start.x))
        return self._strip_at(self.ground_position.with_z(start.z))

    def hover_area(self) -> GridArea:
        return self._strip_at(self.ground_position)

    def _drag_goes_forward(self, start: GridArea, end: GridArea) -> bool:
        if self.orientation is GAxis.Z:
            return end.max.y >= start.max.y
        return end.max.x >= start.max.x

    def drag_start_attach_area(self) -> GridArea:
        """The strip just outside the start of the drag."""
        start, end = self.drag_start_area(), self.drag_end_area()
        forward = self._drag_goes_forward(start, end)
        if self.orientation is GAxis.Z:
            return start.adjacent_bottom() if forward else start.adjacent_top()
        return start.adjacent_left() if forward else start.adjacent_right()

    def drag_end_attach_area(self) -> GridArea:
        """The strip just outside the end of the drag."""
        start, end = self.drag_start_area(), self.drag_end_area()
        forward = self._drag_goes_forward(start, end)
        if self.orientation is GAxis.Z:
            return end.adjacent_top() if forward else end.adjacent_bottom()
        return end.adjacent_right() if forward else end.adjacent_left()

    def move_to(self, ground_position: Vec3) -> GridArea:
        """Follow the cursor on the ground; returns the area now covered."""
        self.ground_position = ground_position
        area = self.area()
        if self.dragging:
            self.drag_area = area
        return area

    def grow(self) -> None:
        self.width = max(self.width + 2, 2)

    def shrink(self) -> None:
        self.width = max(self.width - 2, 2)

    def toggle_orientation(self) -> None:
        self.orientation = GAxis.X if self.orientation is GAxis.Z else GAxis.Z

    def cancel(self) -> None:
        """Abandon the current drag."""
        self.dragging = False

    def click(self, grid: Grid, world: World) -> list:
        """Start a drag, or finish it and return the requests it produces."""
        if not self.dragging:
            self.dragging = True
            self.drag_start_ground_position = self.ground_position
            return []
        return self.end_drag(grid, world)

    def end_drag(self, grid: Grid, world: World) -> list:
        """Finish the drag: create, extend, bridge or cross roads as the ends allow."""
        requests: list = []
        if grid.is_valid_paint_area(self.drag_area):
            extend_start = False
            extend_end = False
            extend_entities: list[Hashable] = []

            for attach, is_start in (
                (self.drag_start_attach_area(), True),
                (self.drag_end_attach_area(), False),
            ):
                adjacent = grid.single_entity_in_area(attach)
                if adjacent is None:
                    continue
                segment = world.get(adjacent, RoadSegment)
                if segment is None:
                    continue
                if segment.orientation is not self.orientation:
                    crossing = segment.get_intersection_area(self.drag_area)
                    requests.append(RequestRoadSplit(adjacent, crossing))
                    requests.append(RequestIntersection(crossing))
                elif segment.drive_width() == self.width:
                    if is_start:
                        extend_start = True
                    else:
                        extend_end = True
                    extend_entities.append(adjacent)

            if not extend_start and not extend_end:
                requests.append(RequestRoad(self.drag_area, self.orientation))
            elif extend_start and extend_end:
                requests.append(RequestRoadBridge(extend_entities[0], extend_entities[1]))
            else:
                requests.extend(RequestRoadExtend(entity, self.drag_area) for entity in extend_entities)

        self.dragging = False
        return requests


def split_road(segment: RoadSegment, split_area: GridArea) -> list[RequestRoad]:
    """The roads left on either side of ``split_area`` once it is cut out of ``segment``."""
    area = segment.area
    pieces: list[RequestRoad] = []
    if segment.orientation is GAxis.Z:
        if area.min.y < split_area.min.y:
            split_max = GridCell(area.max.x, split_area.adjacent_bottom().min.y)
            pieces.append(RequestRoad(GridArea(area.min, split_max), segment.orientation))
        if area.max.y > split_area.max.y:
            split_min = GridCell(area.min.x, split_area.adjacent_top().max.y)
            pieces.append(RequestRoad(GridArea(split_min, area.max), segment.orientation))
    else:
        if area.min.x < split_area.min.x:
            split_max = GridCell(split_area.adjacent_left().min.x, area.max.y)
            pieces.append(RequestRoad(GridArea(area.min, split_max), segment.orientation))
        if area.max.x > split_area.max.x:
            split_min = GridCell(split_area.adjacent_right().max.x, area.min.y)
            pieces.append(RequestRoad(GridArea(split_min, area.max), segment.orientation))
    return pieces


def extend_road(segment: RoadSegment, extension: GridArea) -> RequestRoad:
    """A road replacing ``segment`` that also covers ``extension``."""
    return RequestRoad(segment.area.union(extension), segment.orientation)


def bridge_roads(first: RoadSegment, second: RoadSegment) -> RequestRoad:
    """A road replacing both segments and everything between them."""
    return RequestRoad(first.area.union(second.area), first.orientation)