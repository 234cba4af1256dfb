"""Occupancy grid mapping cells to the entities placed on them."""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from gridtown.geometry import GridCell
from gridtown.grid_area import GridArea

GRID_RADIUS = 100
GRID_DIAMETER = GRID_RADIUS * 2
NUM_CELLS = GRID_DIAMETER * GRID_DIAMETER


class GridBoundsError(IndexError):
    """A cell lies outside the grid."""

    def __init__(self, message: str = "invalid index for the grid: index out of bounds") -> None:
        super().__init__(message)


class Grid:
    """A square grid centred on the origin, each cell holding at most one entity."""

    def __init__(self) -> None:
        self._entities: list[Hashable | None] = [None] * NUM_CELLS
        self._addresses: dict[Hashable, list[GridCell]] = {}

    @staticmethod
    def _index(cell: GridCell) -> int:
        x = cell.x + GRID_RADIUS
        y = cell.y + GRID_RADIUS
        if not (0 <= x < GRID_DIAMETER and 0 <= y < GRID_DIAMETER):
            raise GridBoundsError()
        return y * GRID_DIAMETER + x

    def entity_at(self, cell: GridCell) -> Hashable | None:
        """The entity on ``cell``, or None; raises GridBoundsError outside the grid."""
        return self._entities[self._index(cell)]

    def is_occupied(self, cell: GridCell) -> bool:
        return self.entity_at(cell) is not None

    def is_valid_paint_area(self, area: GridArea) -> bool:
        """True when every cell of ``area`` is inside the grid and free."""
        try:
            return not any(self.is_occupied(cell) for cell in area)
        except GridBoundsError:
            return False

    def single_entity_in_area(self, area: GridArea) -> Hashable | None:
        """The one entity covering all of ``area``, or None if cells are empty, mixed or out of bounds."""
        found = None
        for cell in area:
            try:
                entity = self.entity_at(cell)
            except GridBoundsError:
                return None
            if entity is None:
                return None
            if found is None:
                found = entity
            elif found != entity:
                return None
        return found

    def mark_area_occupied(self, area: GridArea, entity: Hashable) -> None:
        cells = list(area)
        indices = [self._index(cell) for cell in cells]
        for index in indices:
            self._entities[index] = entity
        self._addresses.setdefault(entity, []).extend(cells)

    def erase(self, entity: Hashable) -> None:
        """Clear every cell recorded for ``entity``."""
        for cell in self._addresses.pop(entity, []):
            self._entities[self._index(cell)] = None

    def occupied_cells(self) -> Iterator[GridCell]:
        """Occupied cells, scanning X in the outer loop and Z in the inner."""
        for x in range(-GRID_RADIUS, GRID_RADIUS):
            for y in range(-GRID_RADIUS, GRID_RADIUS):
                cell = GridCell(x, y)
                if self.is_occupied(cell):
                    yield cell