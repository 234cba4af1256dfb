"""Saving and loading the layout of the city as JSON."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.events import RequestBuilding, RequestIntersection, RequestRoad
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis
from gridtown.world import World

SAVEFILE = "assets/saves/world.json"


@dataclass
class SaveObject:
    """The placed buildings, intersections and roads of a city."""

    buildings: list[GridArea] = field(default_factory=list)
    intersections: list[GridArea] = field(default_factory=list)
    roads: list[tuple[GridArea, GAxis]] = field(default_factory=list)

    @classmethod
    def from_world(cls, world: World) -> SaveObject:
        return cls(
            buildings=[building.area for _, building in world.of_type(Building)],
            intersections=[inter.area for _, inter in world.of_type(Intersection)],
            roads=[(segment.area, segment.orientation) for _, segment in world.of_type(RoadSegment)],
        )

    def to_json(self) -> str:
        data = {
            "buildings": [area.to_dict() for area in self.buildings],
            "intersections": [area.to_dict() for area in self.intersections],
            "roads": [[area.to_dict(), axis.value] for area, axis in self.roads],
        }
        return json.dumps(data, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> SaveObject:
        """Parse saved data; raises ValueError if it is not a valid save."""
        try:
            data = json.loads(text)
            buildings = [GridArea.from_dict(item) for item in data["buildings"]]
            intersections = [GridArea.from_dict(item) for item in data["intersections"]]
            roads = []
            for area, axis in data["roads"]:
                roads.append((GridArea.from_dict(area), GAxis(axis)))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid save data: {exc}") from exc
        return cls(buildings=buildings, intersections=intersections, roads=roads)

    def requests(self) -> Iterator[RequestBuilding | RequestIntersection | RequestRoad]:
        """Requests that rebuild the city: buildings, then intersections, then roads."""
        for area in self.buildings:
            yield RequestBuilding(area)
        for area in self.intersections:
            yield RequestIntersection(area)
        for area, axis in self.roads:
            yield RequestRoad(area, axis)


def save_to_file(world: World, path: str | Path = SAVEFILE) -> Path:
    """Write the layout of ``world`` to ``path``, creating its directory."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(SaveObject.from_world(world).to_json(), encoding="utf-8")
    return target


def load_from_file(path: str | Path = SAVEFILE) -> SaveObject:
    """Read a saved layout; raises OSError if unreadable and ValueError if malformed."""
    return SaveObject.from_json(Path(path).read_text(encoding="utf-8"))