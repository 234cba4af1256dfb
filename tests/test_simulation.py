import pytest

from gridtown.components import Building, RoadSegment
from gridtown.events import RequestRoadBridge, RequestRoadSplit
from gridtown.geometry import GridCell
from gridtown.grid import GridBoundsError
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis
from gridtown.simulation import City, Stats, main
from gridtown.vehicle import Vehicle, VehicleSpawnState


def _area(x0, y0, x1, y1):
    return GridArea(GridCell(x0, y0), GridCell(x1, y1))


BUILDING_A = _area(0, 0, 1, 1)
BUILDING_B = _area(0, 4, 1, 5)
ROAD = _area(2, 0, 3, 5)


def _town(seed=0):
    city = City(seed=seed)
    city.request_building(BUILDING_A)
    city.request_building(BUILDING_B)
    city.request_road(ROAD, GAxis.Z)
    city.step(0.0)
    return city


def _only(city, kind):
    items = list(city.world.of_type(kind))
    assert len(items) == 1
    return items[0]


def test_building_is_placed_on_step():
    city = City(seed=1)
    city.request_building(BUILDING_A)
    assert city.stats().buildings == 0
    city.step(0.0)
    assert city.stats().buildings == 1
    assert city.grid.is_occupied(GridCell(1, 1))


def test_overlapping_building_is_refused():
    city = City(seed=1)
    city.request_building(BUILDING_A)
    city.step(0.0)
    city.request_building(BUILDING_A)
    city.step(0.0)
    assert city.stats().buildings == 1


def test_road_outside_grid_raises():
    city = City()
    with pytest.raises(GridBoundsError):
        city.request_road(_area(95, 0, 120, 1), GAxis.X)


def test_graph_links_buildings_and_road():
    city = _town()
    road_entity, road = _only(city, RoadSegment)
    buildings = dict(city.world.of_type(Building))
    assert road.dests == set(buildings)
    for building in buildings.values():
        assert building.roads == {road_entity}


def test_erase_removes_building_and_frees_grid():
    city = City(seed=2)
    city.request_building(BUILDING_A)
    city.step(0.0)
    events = city.erase(BUILDING_A)
    assert len(events) == 1
    city.step(0.0)
    assert city.stats().buildings == 0
    assert not city.grid.is_occupied(GridCell(0, 0))


def test_vehicle_spawns_with_path_through_road():
    city = _town()
    road_entity, road = _only(city, RoadSegment)
    buildings = {entity for entity, _ in city.world.of_type(Building)}
    city.spawn_vehicle()
    city.step(0.0)
    vehicle_entity, vehicle = _only(city, Vehicle)
    assert vehicle.path[1] == road_entity
    assert {vehicle.path[0], vehicle.path[2]} == buildings
    assert vehicle_entity in road.observers


def test_vehicle_moves_onto_road_centre():
    city = _town()
    road_entity, road = _only(city, RoadSegment)
    city.spawn_vehicle()
    city.step(0.0)
    city.step(0.1)
    _, vehicle = _only(city, Vehicle)
    assert vehicle.path_index == 1
    assert vehicle.position.x == road.pos().x


def test_erasing_road_removes_vehicles_on_it():
    city = _town()
    city.spawn_vehicle()
    city.step(0.0)
    assert city.stats().vehicles == 1
    city.erase(ROAD)
    city.step(0.0)
    stats = city.stats()
    assert stats.vehicles == 0
    assert stats.road_segments == 0
    assert all(not b.roads for _, b in city.world.of_type(Building))


def test_no_vehicle_when_spawning_off():
    city = _town()
    city.spawn_state = VehicleSpawnState.OFF
    city.spawn_vehicle()
    city.step(0.0)
    assert city.stats().vehicles == 0


def test_timer_does_not_spawn_for_few_buildings():
    city = _town()
    city.step(0.5)
    city.step(0.5)
    assert city.stats().vehicles == 0


def test_split_replaces_road_with_two_pieces():
    city = City(seed=3)
    long_road = _area(0, 0, 1, 9)
    split_area = _area(0, 4, 1, 5)
    city.request_road(long_road, GAxis.Z)
    city.step(0.0)
    road_entity, _ = _only(city, RoadSegment)
    city.submit([RequestRoadSplit(road_entity, split_area)])
    city.step(0.0)
    roads = list(city.world.of_type(RoadSegment))
    assert len(roads) == 2
    assert road_entity not in city.world
    assert all(not city.grid.is_occupied(cell) for cell in split_area)
    assert city.grid.is_occupied(GridCell(0, 0))
    assert city.grid.is_occupied(GridCell(1, 9))


def test_bridge_joins_two_roads():
    city = City(seed=4)
    city.request_road(_area(0, 0, 1, 3), GAxis.Z)
    city.request_road(_area(0, 6, 1, 9), GAxis.Z)
    city.step(0.0)
    first, second = [entity for entity, _ in city.world.of_type(RoadSegment)]
    city.submit([RequestRoadBridge(first, second)])
    city.step(0.0)
    _, road = _only(city, RoadSegment)
    assert road.area == _area(0, 0, 1, 3).union(_area(0, 6, 1, 9))


def test_adjust_sunlight_round_trip():
    city = City()
    before = city.illuminance
    assert city.adjust_sunlight(1000.0) == before + 1000.0
    assert city.adjust_sunlight(-1000.0) == before


def test_stats_text():
    stats = Stats(buildings=2, road_segments=1, intersections=0, vehicles=0)
    text = str(stats)
    assert "Buildings: 2" in text
    assert "Road Segments: 1" in text
    assert "Vehicles: 0" in text


def test_save_and_load_round_trip(tmp_path):
    city = _town()
    path = city.save(tmp_path / "saves" / "world.json")
    other = City(seed=9)
    other.load(path)
    other.step(0.0)
    assert other.stats() == city.stats()


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        City().load(tmp_path / "missing.json")


def test_main_reports_loaded_city(tmp_path, capsys):
    path = _town().save(tmp_path / "world.json")
    assert main(["--save-file", str(path), "--steps", "2", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Buildings: 2" in out
    assert "Road Segments: 1" in out


def test_main_rejects_malformed_save(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{}", encoding="utf-8")
    assert main(["--save-file", str(path)]) == 1


def test_main_writes_save(tmp_path, capsys):
    path = tmp_path / "out" / "world.json"
    assert main(["--save-file", str(path), "--write"]) == 0
    assert path.exists()
    assert "Buildings: 0" in capsys.readouterr().out