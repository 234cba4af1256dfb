"""Rectangular areas of grid cells."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from gridtown.geometry import GridCell, Vec3
from gridtown.orientation import GDir


def _span(center: int, size: int) -> tuple[int, int]:
    if size % 2 != 0:
        radius = (size - 1) // 2
        return center - radius, center + radius
    radius = size // 2
    return center - (radius - 1), center + radius


@dataclass(frozen=True)
class GridArea:
    """An inclusive rectangle of cells from ``min`` to ``max``."""

    min: GridCell
    max: GridCell

    @classmethod
    def at(cls, location: Vec3, width: int, height: int) -> GridArea:
        """An area of ``width`` x ``height`` cells around the cell under ``location``."""
        hover = GridCell.at(location)
        min_x, max_x = _span(hover.x, width)
        min_y, max_y = _span(hover.y, height)
        return cls(GridCell(min_x, min_y), GridCell(max_x, max_y))

    def center(self) -> Vec3:
        center = (self.min.min_corner() + self.max.max_corner()) / 2.0
        return Vec3(center.x, 0.0, center.z)

    def dimensions(self) -> tuple[float, float]:
        """World-space extent along X and Z."""
        high = self.max.max_corner()
        low = self.min.min_corner()
        return high.x - low.x, high.z - low.z

    def cell_dimensions(self) -> tuple[int, int]:
        """Number of cells along X and Z."""
        return self.max.x - self.min.x + 1, self.max.y - self.min.y + 1

    def contains_point_3d(self, point: Vec3) -> bool:
        low = self.min.min_corner()
        high = self.max.max_corner()
        return low.x <= point.x <= high.x and low.z <= point.z <= high.z

    def union(self, other: GridArea) -> GridArea:
        return GridArea(
            GridCell(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            GridCell(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def adjacent_bottom(self) -> GridArea:
        y = self.min.y - 1
        return GridArea(GridCell(self.min.x, y), GridCell(self.max.x, y))

    def adjacent_top(self) -> GridArea:
        y = self.max.y + 1
        return GridArea(GridCell(self.min.x, y), GridCell(self.max.x, y))

    def adjacent_left(self) -> GridArea:
        x = self.min.x - 1
        return GridArea(GridCell(x, self.min.y), GridCell(x, self.max.y))

    def adjacent_right(self) -> GridArea:
        x = self.max.x + 1
        return GridArea(GridCell(x, self.min.y), GridCell(x, self.max.y))

    def cells(self) -> Iterator[GridCell]:
        """Cells row by row: X varies fastest, then Z."""
        x, y = self.min.x - 1, self.min.y
        while True:
            if x < self.max.x:
                x += 1
            elif y < self.max.y:
                x, y = self.min.x, y + 1
            else:
                return
            yield GridCell(x, y)

    def __iter__(self) -> Iterator[GridCell]:
        return self.cells()

    def adjacent_areas(self) -> Iterator[tuple[GridArea, GDir]]:
        """The four one-cell-thick strips bordering this area, with their direction."""
        yield self.adjacent_top(), GDir.NORTH
        yield self.adjacent_bottom(), GDir.SOUTH
        yield self.adjacent_left(), GDir.WEST
        yield self.adjacent_right(), GDir.EAST

    def to_dict(self) -> dict:
        return {
            "min": {"pos": [self.min.x, self.min.y]},
            "max": {"pos": [self.max.x, self.max.y]},
        }

    @classmethod
    def from_dict(cls, data: dict) -> GridArea:
        try:
            low_x, low_y = data["min"]["pos"]
            high_x, high_y = data["max"]["pos"]
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed grid area: {data!r}") from exc
        values = (low_x, low_y, high_x, high_y)
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise ValueError(f"grid area coordinates must be integers: {data!r}")
        return cls(GridCell(low_x, low_y), GridCell(high_x, high_y))