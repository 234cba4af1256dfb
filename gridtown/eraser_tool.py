"""The bulldozer tool that removes whatever lies under it."""

from __future__ import annotations

from dataclasses import dataclass, field

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.events import OnBuildingDestroyed, OnIntersectionDestroyed, OnRoadDestroyed
from gridtown.geometry import Vec3
from gridtown.grid import Grid, GridBoundsError
from gridtown.grid_area import GridArea
from gridtown.world import World

DestroyEvent = OnBuildingDestroyed | OnRoadDestroyed | OnIntersectionDestroyed


@dataclass
class EraserTool:
    """Erases buildings, roads and intersections in a square under the cursor."""

    dimensions: tuple[int, int] = (1, 1)
    ground_position: Vec3 = field(default_factory=Vec3)

    def area(self) -> GridArea:
        width, height = self.dimensions
        return GridArea.at(self.ground_position, width, height)

    def move_to(self, ground_position: Vec3) -> GridArea:
        """Follow the cursor on the ground; returns the area now covered."""
        self.ground_position = ground_position
        return self.area()

    def _resize(self, delta: int) -> None:
        width, height = self.dimensions
        self.dimensions = (max(width + delta, 1), max(height + delta, 1))

    def grow(self) -> None:
        self._resize(1)

    def shrink(self) -> None:
        self._resize(-1)

    def click(self, grid: Grid, world: World) -> list[DestroyEvent]:
        """One destroy event for every occupied cell in the area, in cell order."""
        events: list[DestroyEvent] = []
        for cell in self.area():
            try:
                entity = grid.entity_at(cell)
            except GridBoundsError:
                continue
            if entity is None:
                continue
            if world.contains(entity, Building):
                events.append(OnBuildingDestroyed(entity))
            elif world.contains(entity, RoadSegment):
                events.append(OnRoadDestroyed(entity))
            elif world.contains(entity, Intersection):
                events.append(OnIntersectionDestroyed(entity))
        return events