import pytest

from gridtown.geometry import GridCell
from gridtown.grid import GRID_DIAMETER, GRID_RADIUS, NUM_CELLS, Grid, GridBoundsError
from gridtown.grid_area import GridArea


def test_whole_grid_is_paintable_and_sized_by_radius():
    grid = Grid()
    whole = GridArea(GridCell(-GRID_RADIUS, -GRID_RADIUS), GridCell(GRID_RADIUS - 1, GRID_RADIUS - 1))
    assert grid.is_valid_paint_area(whole)
    assert len(list(whole)) == NUM_CELLS == GRID_DIAMETER * GRID_DIAMETER
    assert grid.is_occupied(GridCell(99, -100)) is False
    with pytest.raises(GridBoundsError):
        grid.is_occupied(GridCell(100, 0))


def test_new_grid_is_empty():
    grid = Grid()
    assert grid.entity_at(GridCell(0, 0)) is None
    assert grid.is_occupied(GridCell(-GRID_RADIUS, GRID_RADIUS - 1)) is False
    assert list(grid.occupied_cells()) == []


@pytest.mark.parametrize(
    "cell",
    [GridCell(GRID_RADIUS, 0), GridCell(0, GRID_RADIUS), GridCell(-GRID_RADIUS - 1, 0), GridCell(0, -GRID_RADIUS - 1)],
)
def test_out_of_bounds_raises(cell):
    grid = Grid()
    with pytest.raises(GridBoundsError):
        grid.entity_at(cell)
    with pytest.raises(GridBoundsError):
        grid.is_occupied(cell)


def test_bounds_error_message():
    assert str(GridBoundsError()) == "invalid index for the grid: index out of bounds"


def test_mark_and_query():
    grid = Grid()
    area = GridArea(GridCell(1, 1), GridCell(2, 3))
    grid.mark_area_occupied(area, "house")
    assert all(grid.entity_at(cell) == "house" for cell in area)
    assert grid.single_entity_in_area(area) == "house"
    assert not grid.is_valid_paint_area(area)
    assert sorted(grid.occupied_cells(), key=lambda c: (c.y, c.x)) == list(area)


def test_single_entity_rejects_mixed_and_gaps():
    grid = Grid()
    grid.mark_area_occupied(GridArea(GridCell(0, 0), GridCell(0, 0)), "a")
    grid.mark_area_occupied(GridArea(GridCell(1, 0), GridCell(1, 0)), "b")
    assert grid.single_entity_in_area(GridArea(GridCell(0, 0), GridCell(1, 0))) is None
    assert grid.single_entity_in_area(GridArea(GridCell(0, 0), GridCell(0, 1))) is None
    assert grid.single_entity_in_area(GridArea(GridCell(1, 0), GridCell(1, 0))) == "b"


def test_single_entity_out_of_bounds_is_none():
    grid = Grid()
    edge = GridArea(GridCell(GRID_RADIUS - 1, 0), GridCell(GRID_RADIUS - 1, 0))
    grid.mark_area_occupied(edge, "edge")
    assert grid.single_entity_in_area(edge) == "edge"
    assert grid.single_entity_in_area(edge.adjacent_right()) is None


def test_paint_area_validity():
    grid = Grid()
    inside = GridArea(GridCell(-GRID_RADIUS, -GRID_RADIUS), GridCell(GRID_RADIUS - 1, -GRID_RADIUS))
    assert grid.is_valid_paint_area(inside)
    assert not grid.is_valid_paint_area(inside.adjacent_bottom())


def test_erase_frees_cells():
    grid = Grid()
    area = GridArea(GridCell(-3, -3), GridCell(-1, -2))
    grid.mark_area_occupied(area, 7)
    grid.erase(7)
    assert grid.is_valid_paint_area(area)
    assert list(grid.occupied_cells()) == []
    grid.erase(7)
    assert grid.is_valid_paint_area(area)


def test_erase_keeps_other_entities():
    grid = Grid()
    grid.mark_area_occupied(GridArea(GridCell(0, 0), GridCell(0, 0)), 1)
    grid.mark_area_occupied(GridArea(GridCell(5, 5), GridCell(5, 5)), 2)
    grid.erase(1)
    assert grid.entity_at(GridCell(5, 5)) == 2
    assert grid.entity_at(GridCell(0, 0)) is None


def test_mark_out_of_bounds_raises_without_change():
    grid = Grid()
    area = GridArea(GridCell(GRID_RADIUS - 1, 0), GridCell(GRID_RADIUS, 0))
    with pytest.raises(GridBoundsError):
        grid.mark_area_occupied(area, "x")
    assert grid.entity_at(GridCell(GRID_RADIUS - 1, 0)) is None