# gridtown

A small city simulation on a square grid. Lay out buildings, roads and
intersections; they link up into a road graph, and vehicles drive between
buildings along it. The layout can be saved to and loaded from JSON.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
gridtown
```

This runs `gridtown.simulation.main`. It loads a layout, simulates a number of
frames without any display, and prints the city's stats:

```
Buildings: 12
Road Segments: 5
Intersections: 2
Vehicles: 1
```

Options:

- `--save-file PATH`: layout to load, and to write with `--write`
  (default `assets/saves/world.json`). If the file does not exist the city
  starts empty; if it is malformed or lies off the grid the command exits
  with status 1.
- `--steps N`: number of frames to simulate after loading (default 0).
- `--dt SECONDS`: length of each frame (default 1/60).
- `--seed N`: random seed for building styles, trips and routes.
- `--write`: save the city back to `--save-file` after running.

## Using it as a library

`City` in `gridtown.simulation` holds the whole world: the occupancy `Grid`,
the entities in a `World`, and the traffic. Requests are queued and take
effect on the next call to `City.step(dt)`.

```python
from gridtown.geometry import GridCell
from gridtown.grid_area import GridArea
from gridtown.orientation import GAxis
from gridtown.simulation import City

city = City(seed=1)
city.request_road(GridArea(GridCell(0, 0), GridCell(1, 9)), GAxis.Z)
city.request_building(GridArea(GridCell(2, 2), GridCell(3, 3)))
city.request_building(GridArea(GridCell(2, 6), GridCell(3, 7)))
city.step(0.1)

city.spawn_vehicle()
for _ in range(100):
    city.step(0.1)

print(city.stats())
city.save("world.json")
```

Other `City` methods: `request_intersection(area)`, `erase(area)` (queues
destroy events for everything in the area and returns them), `submit(events)`
(queues requests or destroy events such as those the tools return),
`load(path)`, and `adjust_sunlight(delta)`. Buildings are placed only where
the area is free and on the grid; roads and intersections that leave the grid
raise `GridBoundsError` when submitted. Besides vehicles asked for with
`spawn_vehicle()`, one is requested every half second while there are fewer
than one vehicle per five buildings and `spawn_state` is on. Destroying a
place also removes every vehicle whose path goes through it.

### Modules

- `gridtown.geometry`: `Vec3`, `GridCell` and `lerp`.
- `gridtown.grid_area`: `GridArea`, an inclusive rectangle of cells;
  `GridArea.at(location, width, height)` centres one on a world position.
- `gridtown.orientation`: `GAxis` and `GDir`.
- `gridtown.grid`: `Grid`, a 200 × 200 cell grid centred on the origin that
  records which entity occupies each cell; raises `GridBoundsError` outside it.
- `gridtown.components`: `Building`, `Intersection` and `RoadSegment`, the
  nodes and edges of the road graph, with lane geometry on `RoadSegment`.
- `gridtown.road_graph`: functions that link and unlink neighbours as things
  are built and destroyed.
- `gridtown.world`: `World`, the entity store, and `UpdateStage`.
- `gridtown.events`: request and spawn/destroy event dataclasses.
- `gridtown.road_tool`, `gridtown.building_tool`, `gridtown.eraser_tool`:
  `RoadTool`, `BuildingTool` and `EraserTool`, which turn cursor positions and
  clicks into requests; `gridtown.toolbar` has `Toolbar` and `ToolState` for
  switching between them with the keys `1`, `2`, `3` and `` ` ``.
- `gridtown.vehicle`: `Vehicle` and the steering, speed and movement steps.
- `gridtown.routing`: `find_path`, a randomised depth-first search from one
  building to another through roads and intersections, plus `pick_trip` and
  `observe_path`.
- `gridtown.save`: `SaveObject`, `save_to_file` and `load_from_file`.
- `gridtown.models`: `VehicleModelData` asset paths for the vehicle models.

## What it does not do

There is no window, rendering, camera or on-screen toolbar. The tools take
ground positions and return requests; nothing reads a mouse or keyboard.
Vehicle models, building styles and sunlight are kept only as data. Vehicles
see another vehicle only when it is straight ahead of them. When there is no
save file, the city starts empty rather than with a built-in layout.