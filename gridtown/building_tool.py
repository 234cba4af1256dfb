"""The building placement tool."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from gridtown.events import RequestBuilding
from gridtown.geometry import Vec3
from gridtown.grid import Grid
from gridtown.grid_area import GridArea

MIN_HEIGHT = 0.5
MAX_HEIGHT = 6.0
MIN_GRAY = 0.05
MAX_GRAY = 0.25
BUILDING_CROP = 0.5


@dataclass
class BuildingTool:
    """Places rectangular buildings of a chosen size under the cursor."""

    dimensions: tuple[int, int] = (1, 1)
    ground_position: Vec3 = field(default_factory=Vec3)

    def area(self) -> GridArea:
        """The area a click would build on."""
        width, height = self.dimensions
        return GridArea.at(self.ground_position, width, height)

    def move_to(self, ground_position: Vec3) -> GridArea:
        """Follow the cursor on the ground; returns the area now covered."""
        self.ground_position = ground_position
        return self.area()

    def resize(self, dx: int, dy: int) -> tuple[int, int]:
        """Change the footprint by ``dx`` and ``dy`` cells, never below one cell."""
        width, height = self.dimensions
        self.dimensions = (max(width + dx, 1), max(height + dy, 1))
        return self.dimensions

    def click(self) -> RequestBuilding:
        """The request for a building on the current area."""
        return RequestBuilding(self.area())

    def preview_is_valid(self, grid: Grid) -> bool:
        """Whether a building could be placed on the current area."""
        return grid.is_valid_paint_area(self.area())


@dataclass(frozen=True)
class BuildingStyle:
    """The look of a spawned building: height, shade of gray and inset from its area."""

    height: float
    gray: float
    crop: float = BUILDING_CROP


def _uniform(rng: random.Random, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


def random_building_style(rng: random.Random | None = None) -> BuildingStyle:
    """A random height in [0.5, 6.0) and gray level in [0.05, 0.25)."""
    rng = rng if rng is not None else random.Random()
    height = _uniform(rng, MIN_HEIGHT, MAX_HEIGHT)
    gray = _uniform(rng, MIN_GRAY, MAX_GRAY)
    return BuildingStyle(height=height, gray=gray)