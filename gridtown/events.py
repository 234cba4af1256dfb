"""Messages passed between the tools, the road graph and the save system."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any

from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis


@dataclass(frozen=True)
class OnRoadSpawned:
    entity: Hashable


@dataclass(frozen=True)
class OnIntersectionSpawned:
    entity: Hashable


@dataclass(frozen=True)
class OnBuildingSpawned:
    entity: Hashable


@dataclass(frozen=True)
class OnRoadDestroyed:
    entity: Hashable


@dataclass(frozen=True)
class OnIntersectionDestroyed:
    entity: Hashable


@dataclass(frozen=True)
class OnBuildingDestroyed:
    entity: Hashable


@dataclass(frozen=True)
class RequestRoad:
    area: GridArea
    orientation: GAxis


@dataclass(frozen=True)
class RequestIntersection:
    area: GridArea


@dataclass(frozen=True)
class RequestBuilding:
    area: GridArea


@dataclass(frozen=True)
class RequestRoadSplit:
    """Replace a road with the pieces left around ``split_area``."""

    entity: Hashable
    split_area: GridArea


@dataclass(frozen=True)
class RequestRoadExtend:
    """Grow a road so that it also covers ``extension``."""

    entity: Hashable
    extension: GridArea


@dataclass(frozen=True)
class RequestRoadBridge:
    """Join two roads into one that spans both."""

    first: Hashable
    second: Hashable


@dataclass(frozen=True)
class SaveRequest:
    """Ask for the world to be written to disk."""


@dataclass(frozen=True)
class ChangeToolRequest:
    tool: Any