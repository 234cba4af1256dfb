"""Buildings, intersections and road segments placed on the grid."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from gridtown.geometry import Vec3, lerp
from gridtown.grid_area import GridArea
from gridtown.geometry import GridCell
from gridtown.orientation import GAxis, GDir

LANE_MEDIAN_SIZE = 0.5
LANE_CURB = 0.5


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(eq=False)
class Building:
    """A destination connected to the road segments that border it."""

    area: GridArea
    roads: set[Hashable] = field(default_factory=set)
    observers: set[Hashable] = field(default_factory=set)

    def pos(self) -> Vec3:
        return self.area.center()


@dataclass(eq=False)
class Intersection:
    """A junction with one road slot per direction, indexed by ``GDir.index``."""

    area: GridArea
    roads: list[Hashable | None] = field(default_factory=lambda: [None] * 4)
    observers: set[Hashable] = field(default_factory=set)

    def pos(self) -> Vec3:
        return self.area.center()


@dataclass(eq=False)
class RoadSegment:
    """A straight road with an intersection slot at each end, indexed by ``GDir.binary_index``."""

    area: GridArea
    orientation: GAxis
    ends: list[Hashable | None] = field(default_factory=lambda: [None, None])
    dests: set[Hashable] = field(default_factory=set)
    observers: set[Hashable] = field(default_factory=set)

    def pos(self) -> Vec3:
        return self.area.center()

    def drive_length(self) -> int:
        """Number of cells along the direction of travel."""
        width_x, width_z = self.area.cell_dimensions()
        return width_z if self.orientation is GAxis.Z else width_x

    def drive_width(self) -> int:
        """Number of cells across the direction of travel."""
        width_x, width_z = self.area.cell_dimensions()
        return width_x if self.orientation is GAxis.Z else width_z

    def num_lanes(self) -> int:
        """Lanes in each direction."""
        return int(self.drive_width() / 2)

    def speed_limit(self) -> float:
        return self.drive_width() * 0.25

    def get_intersection_area(self, turn_to_area: GridArea) -> GridArea:
        """The part of this road crossed by a road covering ``turn_to_area``."""
        if self.orientation is GAxis.Z:
            return GridArea(
                GridCell(self.area.min.x, turn_to_area.min.y),
                GridCell(self.area.max.x, turn_to_area.max.y),
            )
        return GridArea(
            GridCell(turn_to_area.min.x, self.area.min.y),
            GridCell(turn_to_area.max.x, self.area.max.y),
        )

    def get_lane_pos(self, start_pos: Vec3) -> Vec3:
        """``start_pos`` moved onto the centre line of this road."""
        center = self.area.center()
        if self.orientation is GAxis.Z:
            return start_pos.with_x(center.x)
        return start_pos.with_z(center.z)

    def clamp_to_lane(self, direction: GDir, num: int, pos: Vec3) -> Vec3:
        """``pos`` moved into lane ``num`` for traffic heading ``direction``, kept within the road."""
        high = self.area.max.max_corner()
        low = self.area.min.min_corner()

        lanes = self.num_lanes() - 1.0
        dir_width = ((lanes + 1.0) - LANE_MEDIAN_SIZE) - LANE_CURB
        t = 0.0 if lanes == 0.0 else num / lanes

        if self.orientation is GAxis.Z:
            if direction is GDir.NORTH:
                start = low.x + LANE_CURB
                end = start + dir_width
            else:
                start = high.x - LANE_CURB
                end = start - dir_width
            return pos.with_x(lerp(start, end, t)).with_z(_clamp(pos.z, low.z, high.z))

        if direction is GDir.EAST:
            start = low.z + LANE_CURB
            end = start + dir_width
        else:
            start = high.z - LANE_CURB
            end = start - dir_width
        return pos.with_z(lerp(start, end, t)).with_x(_clamp(pos.x, low.x, high.x))