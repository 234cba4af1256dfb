import dataclasses

import pytest

from gridtown.events import (
    ChangeToolRequest,
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
    SaveRequest,
)
from gridtown.geometry import GridCell
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis

AREA = GridArea(GridCell(0, 0), GridCell(1, 3))


def _entity_events(entity):
    return [
        OnRoadSpawned(entity),
        OnIntersectionSpawned(entity),
        OnBuildingSpawned(entity),
        OnRoadDestroyed(entity),
        OnIntersectionDestroyed(entity),
        OnBuildingDestroyed(entity),
    ]


def test_entity_events_carry_entity():
    first = _entity_events(42)
    second = _entity_events(42)
    assert [event.entity for event in first] == [42] * 6
    assert first == second


def test_entity_events_are_frozen():
    for event in _entity_events(1):
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.entity = 2
        assert event.entity == 1


def test_events_of_different_kind_differ():
    assert OnRoadDestroyed(5) != OnBuildingDestroyed(5)


def test_request_road_fields():
    request = RequestRoad(AREA, GAxis.Z)
    assert request.area == AREA
    assert request.orientation is GAxis.Z


def test_area_requests():
    assert RequestIntersection(AREA).area == AREA
    assert RequestBuilding(AREA).area == AREA


def test_split_extend_bridge_fields():
    split = RequestRoadSplit(3, AREA)
    extend = RequestRoadExtend(4, AREA)
    bridge = RequestRoadBridge(5, 6)
    assert (split.entity, split.split_area) == (3, AREA)
    assert (extend.entity, extend.extension) == (4, AREA)
    assert (bridge.first, bridge.second) == (5, 6)


def test_events_are_hashable_and_deduplicate():
    events = {OnRoadSpawned(1), OnRoadSpawned(1), RequestBuilding(AREA), RequestBuilding(AREA)}
    assert len(events) == 2


def test_save_request_instances_are_equal():
    requests = [SaveRequest(), SaveRequest(), OnRoadSpawned(1)]
    assert requests.count(SaveRequest()) == 2


def test_change_tool_request_holds_tool():
    request = ChangeToolRequest("road")
    assert request.tool == "road"