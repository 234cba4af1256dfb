"""Vehicles driving along paths through the road graph."""

from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum

from gridtown.components import Building, Intersection, RoadSegment
from gridtown.geometry import Vec3, lerp
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis, GDir
from gridtown.world import World

VEHICLE_HEIGHT = 0.25
VEHICLE_MAX_SPEED = 1.5
VEHICLE_MIN_SPEED = 0.01
MAX_SPEED_VARIATION = 0.5
SPAWN_TIME_SECONDS = 0.5
BUILDINGS_PER_VEHICLE = 5
INTERSECTION_OFFSET = 0.2
SLOW_DISTANCE = 3.0
FOLLOW_LEAD = 0.5
ARRIVAL_DISTANCE = 1.0
TURN_DEADZONE = 0.01


class AiVisualizationState(Enum):
    VISUALIZE = "Visualize"
    HIDE = "Hide"

    @classmethod
    def default(cls) -> AiVisualizationState:
        return cls.HIDE

    def toggled(self) -> AiVisualizationState:
        if self is AiVisualizationState.HIDE:
            return AiVisualizationState.VISUALIZE
        return AiVisualizationState.HIDE


class VehicleSpawnState(Enum):
    OFF = "Off"
    ON = "On"

    @classmethod
    def default(cls) -> VehicleSpawnState:
        return cls.ON

    def toggled(self) -> VehicleSpawnState:
        if self is VehicleSpawnState.ON:
            return VehicleSpawnState.OFF
        return VehicleSpawnState.ON


class StepType(Enum):
    ROAD = "Road"
    INTERSECTION = "Intersection"
    BUILDING = "Building"


@dataclass
class Vehicle:
    """A vehicle following ``path``, a list of building, road and intersection entities.

    ``heading`` is the rotation about the Y axis; at zero the vehicle faces -Z.
    """

    path: list[Hashable]
    speed_multiplier: float
    path_index: int = 0
    speed: float = 0.0
    follow: Vec3 = field(default_factory=Vec3)
    checkpoint: Vec3 = field(default_factory=Vec3)
    lane: int = 0
    position: Vec3 = field(default_factory=Vec3)
    heading: float = 0.0


def _forward(heading: float) -> Vec3:
    return Vec3(-math.sin(heading), 0.0, -math.cos(heading))


def _left(heading: float) -> Vec3:
    return Vec3(-math.cos(heading), 0.0, math.sin(heading))


def _right(heading: float) -> Vec3:
    return Vec3(math.cos(heading), 0.0, -math.sin(heading))


@dataclass
class SpawnTimer:
    """A repeating timer that fires every ``duration`` seconds."""

    duration: float = SPAWN_TIME_SECONDS
    elapsed: float = 0.0
    times_finished: int = 0

    def tick(self, seconds: float) -> bool:
        """Advance by ``seconds``; True when the timer fired during this tick."""
        self.elapsed += seconds
        if self.duration <= 0.0:
            self.times_finished = 1
            self.elapsed = 0.0
            return True
        if self.elapsed >= self.duration:
            self.times_finished = int(self.elapsed // self.duration)
            self.elapsed %= self.duration
            return True
        self.times_finished = 0
        return False


def max_vehicles(num_buildings: int) -> int:
    """How many vehicles the city supports for its number of buildings."""
    return num_buildings // BUILDINGS_PER_VEHICLE


def step_type(world: World, entity: Hashable) -> StepType:
    """What kind of place a path step is; anything unknown counts as an intersection."""
    if world.contains(entity, RoadSegment):
        return StepType.ROAD
    if world.contains(entity, Building):
        return StepType.BUILDING
    return StepType.INTERSECTION


def direction_to_area(segment: RoadSegment, area: GridArea) -> GDir:
    """Direction of travel along ``segment`` towards ``area``."""
    target = area.center()
    own = segment.area.center()
    if segment.orientation is GAxis.Z:
        return GDir.NORTH if target.z > own.z else GDir.SOUTH
    return GDir.WEST if target.x > own.x else GDir.EAST


def direction_to_building(segment: RoadSegment, building: Building, pos: Vec3) -> GDir:
    """Direction of travel along ``segment`` from ``pos`` towards ``building``."""
    target = building.area.center()
    if segment.orientation is GAxis.Z:
        return GDir.NORTH if target.z > pos.z else GDir.SOUTH
    return GDir.WEST if target.x > pos.x else GDir.EAST


def get_intersection_goal(intersection: Intersection, direction: GDir, start_pos: Vec3) -> Vec3:
    """The point in ``intersection`` reached by driving straight in ``direction`` from ``start_pos``."""
    center = intersection.area.center()
    if direction in (GDir.NORTH, GDir.SOUTH):
        return center.with_x(start_pos.x).with_y(start_pos.y)
    return center.with_z(start_pos.z).with_y(start_pos.y)


def get_lane_for_turn(curr: RoadSegment, next_segment: RoadSegment, clamp: RoadSegment, prev: int) -> int:
    """The lane of ``clamp`` to use when going from ``curr`` to ``next_segment``."""
    z_less = next_segment.area.center().z < curr.area.center().z
    x_less = next_segment.area.center().x < curr.area.center().x
    outer = clamp.num_lanes() - 1

    if curr.orientation is next_segment.orientation:
        return max(0, min(prev, max(clamp.num_lanes() - 2, 0)))
    if next_segment.orientation is GAxis.X:
        if z_less:
            return outer if x_less else 0
        return 0 if x_less else outer
    if x_less:
        return 0 if z_less else outer
    return outer if z_less else 0


def _lead_point(position: Vec3, checkpoint: Vec3, lane_pos: Vec3) -> Vec3:
    current_vec = position - checkpoint
    desired_vec = lane_pos - checkpoint
    proj = checkpoint + current_vec.project_onto(desired_vec)
    return proj + (checkpoint - proj).normalize() * FOLLOW_LEAD


def update_vehicle(vehicle: Vehicle, world: World) -> bool:
    """Steer ``vehicle`` along its path; True once it has reached the end and should be removed."""
    if vehicle.path_index >= len(vehicle.path) - 1:
        return True

    curr = vehicle.path[vehicle.path_index]
    nxt = vehicle.path[vehicle.path_index + 1]
    curr_type = step_type(world, curr)
    next_type = step_type(world, nxt)
    pos = vehicle.position

    vehicle.checkpoint = pos
    vehicle.follow = pos

    if curr_type is StepType.BUILDING and next_type is StepType.ROAD:
        segment = world.get(nxt, RoadSegment)
        if segment is not None:
            vehicle.position = segment.get_lane_pos(pos)
            vehicle.path_index += 1

    elif curr_type is StepType.ROAD and next_type is StepType.BUILDING:
        building = world.get(nxt, Building)
        segment = world.get(curr, RoadSegment)
        if building is not None and segment is not None:
            approach = direction_to_building(segment, building, pos)
            target = building.area.center().with_y(pos.y)
            vehicle.checkpoint = segment.clamp_to_lane(approach, 0, target)
            lane_pos = segment.clamp_to_lane(approach, 0, pos)
            vehicle.follow = _lead_point(pos, vehicle.checkpoint, lane_pos)
            if pos.distance(vehicle.checkpoint) < ARRIVAL_DISTANCE:
                vehicle.path_index += 1

    elif curr_type is StepType.ROAD and next_type is StepType.INTERSECTION:
        intersection = world.get(nxt, Intersection)
        segment = world.get(curr, RoadSegment)
        if intersection is not None and segment is not None:
            approach = direction_to_area(segment, intersection.area)
            vehicle.checkpoint = get_intersection_goal(intersection, approach, pos)

            after = vehicle.path_index + 2
            if after < len(vehicle.path):
                next_segment = world.get(vehicle.path[after], RoadSegment)
                if next_segment is not None:
                    vehicle.lane = get_lane_for_turn(segment, next_segment, segment, vehicle.lane)

            lane_pos = segment.clamp_to_lane(approach, vehicle.lane, pos)
            vehicle.follow = _lead_point(pos, vehicle.checkpoint, lane_pos)
            if intersection.area.contains_point_3d(pos):
                vehicle.path_index += 1

    elif curr_type is StepType.INTERSECTION:
        intersection = world.get(curr, Intersection)
        next_segment = world.get(nxt, RoadSegment)
        if intersection is not None and next_segment is not None:
            approach = direction_to_area(next_segment, intersection.area).inverse()

            if vehicle.path_index >= 1:
                prev_segment = world.get(vehicle.path[vehicle.path_index - 1], RoadSegment)
                if prev_segment is not None:
                    vehicle.lane = get_lane_for_turn(prev_segment, next_segment, next_segment, vehicle.lane)

            checkpoint = next_segment.clamp_to_lane(approach, vehicle.lane, pos)
            vehicle.checkpoint = checkpoint + approach.as_vec3() * INTERSECTION_OFFSET
            vehicle.follow = pos + (vehicle.checkpoint - pos).normalize() * FOLLOW_LEAD
            if next_segment.area.contains_point_3d(pos):
                vehicle.path_index += 1

    return False


def update_speed(
    vehicle: Vehicle, world: World, dt: float, obstacle_distance: float | None = None
) -> float:
    """Ease towards the speed limit and brake for an obstacle ahead; returns the new speed.

    ``obstacle_distance`` is the distance to the nearest vehicle ahead, or None when
    there is none or when that vehicle is itself looking at this one.
    """
    target = vehicle.speed_multiplier
    if 0 <= vehicle.path_index < len(vehicle.path):
        segment = world.get(vehicle.path[vehicle.path_index], RoadSegment)
        if segment is not None:
            target = segment.speed_limit() * vehicle.speed_multiplier

    vehicle.speed = lerp(vehicle.speed, target, dt * 0.5)

    if obstacle_distance is not None and obstacle_distance < SLOW_DISTANCE:
        vehicle.speed -= max(SLOW_DISTANCE - obstacle_distance, 0.0) * dt
        vehicle.speed = max(vehicle.speed, VEHICLE_MIN_SPEED)
    return vehicle.speed


def execute_movement(vehicle: Vehicle, dt: float) -> Vec3:
    """Drive forward for ``dt`` seconds; returns the new position."""
    vehicle.position = vehicle.position + _forward(vehicle.heading) * (vehicle.speed * dt)
    return vehicle.position


def execute_turning(vehicle: Vehicle, dt: float) -> float:
    """Turn towards the follow point; returns the new heading."""
    follow_vec = vehicle.follow.with_y(0.0) - vehicle.position.with_y(0.0)
    follow_dir = follow_vec.normalize()
    dot = follow_dir.dot(_left(vehicle.heading))

    if dot > TURN_DEADZONE:
        vehicle.heading += follow_dir.angle_between(_right(vehicle.heading)) * dt
    elif dot < -TURN_DEADZONE:
        vehicle.heading -= follow_dir.angle_between(_left(vehicle.heading)) * dt
    elif follow_vec.length() == 0.0:
        vehicle.heading = 0.0
    else:
        vehicle.heading = math.atan2(-follow_vec.x, -follow_vec.z)
    return vehicle.heading