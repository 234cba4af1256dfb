"""The city simulation: placing things, running frames and reporting stats."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from pathlib import Path

from gridtown.building_tool import BuildingStyle, random_building_style
from gridtown.components import Building, Intersection, RoadSegment
from gridtown.events import (
    OnBuildingDestroyed,
    OnBuildingSpawned,
    OnIntersectionDestroyed,
    OnIntersectionSpawned,
    OnRoadDestroyed,
    OnRoadSpawned,
    RequestBuilding,
    RequestIntersection,
    RequestRoad,
    RequestRoadBridge,
    RequestRoadExtend,
    RequestRoadSplit,
)
from gridtown.geometry import Vec3
from gridtown.grid import Grid, GridBoundsError
from gridtown.grid_area import GridArea
from gridtown.models import VehicleModelData, default_vehicle_models
from gridtown.orientation import GAxis
from gridtown.road_graph import (
    add_building_to_graph,
    add_intersection_to_graph,
    add_road_to_graph,
    remove_building_from_graph,
    remove_intersection_from_graph,
    remove_road_from_graph,
)
from gridtown.road_tool import ROAD_HEIGHT, bridge_roads, extend_road, split_road
from gridtown.routing import find_path, observe_path, pick_trip
from gridtown.save import SAVEFILE, load_from_file, save_to_file
from gridtown.vehicle import (
    MAX_SPEED_VARIATION,
    VEHICLE_HEIGHT,
    VEHICLE_MAX_SPEED,
    SpawnTimer,
    Vehicle,
    VehicleSpawnState,
    execute_movement,
    execute_turning,
    max_vehicles,
    update_speed,
    update_vehicle,
)
from gridtown.world import World

DEFAULT_ILLUMINANCE = 10_000.0
SUNLIGHT_STEP = 1_000.0
VEHICLE_HALF_WIDTH = 0.5

_DESTROY_EVENTS = (OnBuildingDestroyed, OnRoadDestroyed, OnIntersectionDestroyed)


@dataclass(frozen=True)
class Stats:
    """Counts of what the city holds."""

    buildings: int
    road_segments: int
    intersections: int
    vehicles: int

    def __str__(self) -> str:
        return "\n".join(
            (
                f"Buildings: {self.buildings}",
                f"Road Segments: {self.road_segments}",
                f"Intersections: {self.intersections}",
                f"Vehicles: {self.vehicles}",
            )
        )


class City:
    """A grid of buildings, roads and intersections with vehicles driving between buildings.

    Requests are queued and take effect on the next call to :meth:`step`.
    """

    def __init__(self, seed: int | None = None, models: Iterable[VehicleModelData] | None = None) -> None:
        self.world = World()
        self.grid = Grid()
        self.rng = random.Random(seed)
        self.models = list(models) if models is not None else default_vehicle_models()
        self.spawn_timer = SpawnTimer()
        self.spawn_state = VehicleSpawnState.default()
        self.illuminance = DEFAULT_ILLUMINANCE
        self.building_styles: dict[Hashable, BuildingStyle] = {}
        self._requests: list = []
        self._destroyed: list = []
        self._vehicle_requests = 0

    def submit(self, events: Iterable) -> None:
        """Queue requests and destroy events, such as those produced by the tools.

        Raises GridBoundsError for a road or intersection that leaves the grid.
        """
        for event in events:
            if isinstance(event, _DESTROY_EVENTS):
                self._destroyed.append(event)
                continue
            if isinstance(event, (RequestRoad, RequestIntersection)):
                for cell in event.area:
                    self.grid.entity_at(cell)
            self._requests.append(event)

    def request_building(self, area: GridArea) -> None:
        """Queue a building; it is placed only if the area is free and on the grid."""
        self.submit([RequestBuilding(area)])

    def request_road(self, area: GridArea, orientation: GAxis) -> None:
        self.submit([RequestRoad(area, orientation)])

    def request_intersection(self, area: GridArea) -> None:
        self.submit([RequestIntersection(area)])

    def erase(self, area: GridArea) -> list:
        """Queue destruction of everything in ``area``; returns the destroy events queued."""
        events = []
        for cell in area:
            try:
                entity = self.grid.entity_at(cell)
            except GridBoundsError:
                continue
            if entity is None:
                continue
            if self.world.contains(entity, Building):
                events.append(OnBuildingDestroyed(entity))
            elif self.world.contains(entity, RoadSegment):
                events.append(OnRoadDestroyed(entity))
            elif self.world.contains(entity, Intersection):
                events.append(OnIntersectionDestroyed(entity))
        events = list(dict.fromkeys(events))
        self.submit(events)
        return events

    def spawn_vehicle(self) -> None:
        """Queue a vehicle travelling between two random buildings."""
        self._vehicle_requests += 1

    def adjust_sunlight(self, delta: float = SUNLIGHT_STEP) -> float:
        """Change the sunlight's illuminance; returns the new value."""
        self.illuminance += delta
        return self.illuminance

    def save(self, path: str | Path = SAVEFILE) -> Path:
        return save_to_file(self.world, path)

    def load(self, path: str | Path = SAVEFILE):
        """Queue the layout stored at ``path``; returns the loaded save."""
        data = load_from_file(path)
        self.submit(data.requests())
        return data

    def stats(self) -> Stats:
        return Stats(
            buildings=self.world.count(Building),
            road_segments=self.world.count(RoadSegment),
            intersections=self.world.count(Intersection),
            vehicles=self.world.count(Vehicle),
        )

    def step(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds and apply all queued requests."""
        finished = self._drive_vehicles(dt)

        if self.spawn_timer.tick(dt):
            if self.world.count(Vehicle) < max_vehicles(self.world.count(Building)):
                self._vehicle_requests += 1

        requests, self._requests = self._requests, []
        destroyed, self._destroyed = self._destroyed, []

        requests = self._apply_road_edits(requests, destroyed)

        for event in destroyed:
            self.grid.erase(event.entity)

        spawned = self._spawn(requests)
        self._spawn_vehicles()

        for event in spawned:
            if isinstance(event, OnRoadSpawned):
                add_road_to_graph(self.world, self.grid, event.entity)
            elif isinstance(event, OnIntersectionSpawned):
                add_intersection_to_graph(self.world, self.grid, event.entity)
            else:
                add_building_to_graph(self.world, self.grid, event.entity)
        for event in destroyed:
            if isinstance(event, OnRoadDestroyed):
                remove_road_from_graph(self.world, event.entity)
            elif isinstance(event, OnIntersectionDestroyed):
                remove_intersection_from_graph(self.world, event.entity)
            else:
                remove_building_from_graph(self.world, event.entity)

        for event in destroyed:
            kind = {
                OnRoadDestroyed: RoadSegment,
                OnIntersectionDestroyed: Intersection,
                OnBuildingDestroyed: Building,
            }[type(event)]
            component = self.world.get(event.entity, kind)
            if component is not None:
                for observer in component.observers:
                    self.world.despawn(observer)

        for event in destroyed:
            self.world.despawn(event.entity)
            self.building_styles.pop(event.entity, None)
        for entity in finished:
            self.world.despawn(entity)

    def _apply_road_edits(self, requests: list, destroyed: list) -> list:
        plain = []
        generated = []
        for request in requests:
            if isinstance(request, RequestRoadSplit):
                segment = self.world.get(request.entity, RoadSegment)
                if segment is not None:
                    generated.extend(split_road(segment, request.split_area))
                    destroyed.append(OnRoadDestroyed(request.entity))
            elif isinstance(request, RequestRoadExtend):
                segment = self.world.get(request.entity, RoadSegment)
                if segment is not None:
                    generated.append(extend_road(segment, request.extension))
                    destroyed.append(OnRoadDestroyed(request.entity))
            elif isinstance(request, RequestRoadBridge):
                first = self.world.get(request.first, RoadSegment)
                second = self.world.get(request.second, RoadSegment)
                if first is not None and second is not None:
                    generated.append(bridge_roads(first, second))
                    destroyed.append(OnRoadDestroyed(request.first))
                    destroyed.append(OnRoadDestroyed(request.second))
            else:
                plain.append(request)
        return plain + generated

    def _spawn(self, requests: list) -> list:
        spawned = []
        for request in requests:
            if isinstance(request, RequestBuilding):
                style = random_building_style(self.rng)
                if self.grid.is_valid_paint_area(request.area):
                    entity = self.world.spawn(Building(request.area))
                    self.grid.mark_area_occupied(request.area, entity)
                    self.building_styles[entity] = style
                    spawned.append(OnBuildingSpawned(entity))
        for request in requests:
            if isinstance(request, RequestRoad):
                entity = self.world.spawn(RoadSegment(request.area, request.orientation))
                self.grid.mark_area_occupied(request.area, entity)
                spawned.append(OnRoadSpawned(entity))
        for request in requests:
            if isinstance(request, RequestIntersection):
                entity = self.world.spawn(Intersection(request.area))
                self.grid.mark_area_occupied(request.area, entity)
                spawned.append(OnIntersectionSpawned(entity))
        return spawned

    def _spawn_vehicles(self) -> None:
        count, self._vehicle_requests = self._vehicle_requests, 0
        if self.spawn_state is not VehicleSpawnState.ON:
            return
        for _ in range(count):
            trip = pick_trip(self.world, self.rng)
            if trip is None:
                return
            start, end = trip
            path = find_path(self.world, start, end, self.rng)
            if path is None:
                continue
            building = self.world.get(path[0], Building)
            max_speed = VEHICLE_MAX_SPEED + self.rng.uniform(1.0 - MAX_SPEED_VARIATION, 1.0 + MAX_SPEED_VARIATION)
            model = self.rng.choice(self.models)
            position = building.pos().with_y(ROAD_HEIGHT + VEHICLE_HEIGHT + model.vertical_offset)
            vehicle = Vehicle(path=list(path), speed_multiplier=max_speed, position=position)
            entity = self.world.spawn(vehicle)
            observe_path(self.world, path, entity)

    def _drive_vehicles(self, dt: float) -> list[Hashable]:
        vehicles = list(self.world.of_type(Vehicle))
        finished = [entity for entity, vehicle in vehicles if update_vehicle(vehicle, self.world)]

        nearest = {entity: _nearest_ahead(entity, vehicle, vehicles) for entity, vehicle in vehicles}
        for entity, vehicle in vehicles:
            hit = nearest[entity]
            obstacle = None
            if hit is not None:
                other, distance = hit
                other_hit = nearest.get(other)
                if other_hit is None or other_hit[0] != entity:
                    obstacle = distance
            update_speed(vehicle, self.world, dt, obstacle)
            execute_movement(vehicle, dt)
            execute_turning(vehicle, dt)
        return finished


def _nearest_ahead(
    entity: Hashable, vehicle: Vehicle, vehicles: list[tuple[Hashable, Vehicle]]
) -> tuple[Hashable, float] | None:
    """The closest other vehicle straight ahead and its distance along the heading."""
    import math

    forward = Vec3(-math.sin(vehicle.heading), 0.0, -math.cos(vehicle.heading))
    best: tuple[Hashable, float] | None = None
    for other_entity, other in vehicles:
        if other_entity == entity:
            continue
        rel = (other.position - vehicle.position).with_y(0.0)
        along = rel.dot(forward)
        if along <= 0.0:
            continue
        lateral = (rel - forward * along).length()
        if lateral > VEHICLE_HALF_WIDTH:
            continue
        if best is None or along < best[1]:
            best = (other_entity, along)
    return best


def main(argv: list[str] | None = None) -> int:
    """Run the city without a display and print its stats."""
    parser = argparse.ArgumentParser(prog="gridtown", description="Run the city simulation and report its stats.")
    parser.add_argument("--save-file", default=SAVEFILE, help="layout to load, and to write with --write")
    parser.add_argument("--steps", type=int, default=0, help="number of frames to simulate")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="seconds per frame")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--write", action="store_true", help="save the city after running")
    args = parser.parse_args(argv)

    city = City(seed=args.seed)
    try:
        city.load(args.save_file)
        print(f"Loaded the game from {args.save_file}")
    except OSError:
        print(f"No saved game at {args.save_file}", file=sys.stderr)
    except (ValueError, GridBoundsError) as exc:
        print(f"Could not load {args.save_file}: {exc}", file=sys.stderr)
        return 1

    city.step(0.0)
    for _ in range(max(args.steps, 0)):
        city.step(args.dt)

    if args.write:
        path = city.save(args.save_file)
        print(f"Saved the game to {path}")

    print(city.stats())
    return 0