import numpy as np
import pytest

from pathviz.pathviz_engine.constants import EMPTY, WALL, START, END, VISITED, FRONTIER, PATH
from pathviz.pathviz_engine.errors import InvalidEndpointError
from pathviz.pathviz_engine.space import GridSpace, GeoBounds, GeoSpace


def test_grid_neighbor_order():
    space = GridSpace(3, 3, start=(0, 0), end=(2, 2))
    assert space.neighbors((1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]
    assert space.neighbors((1, 1), include_diagonal=True)[4:] == [(0, 0), (0, 2), (2, 0), (2, 2)]


def test_grid_neighbors_skip_walls_and_bounds():
    space = GridSpace(3, 3, start=(0, 0), end=(2, 2))
    space.set_wall((0, 1))
    assert space.neighbors((0, 0)) == [(1, 0)]


def test_grid_keeps_single_start_and_end():
    space = GridSpace(4, 4, start=(0, 0), end=(3, 3))
    assert space.move_start((1, 1))
    assert not space.move_start((3, 3))
    assert not space.move_end((1, 1))
    assert np.count_nonzero(space.cells == START) == 1
    assert np.count_nonzero(space.cells == END) == 1
    assert space.cell((0, 0)) == EMPTY


def test_walls_never_cover_endpoints():
    space = GridSpace(4, 4, start=(0, 0), end=(3, 3))
    assert space.toggle_wall((0, 0)) == START
    assert not space.set_wall((3, 3))
    assert space.toggle_wall((1, 1)) == WALL
    assert space.toggle_wall((1, 1)) == EMPTY
    space.generate_random_walls(1.0, np.random.default_rng(0))
    assert space.cell((0, 0)) == START and space.cell((3, 3)) == END
    assert space.walkable_count() == 2


def test_move_start_over_a_wall_clears_it():
    space = GridSpace(3, 3, start=(0, 0), end=(2, 2))
    space.set_wall((1, 1))
    assert space.move_start((1, 1))
    assert space.cell((1, 1)) == START
    assert not space.is_blocked((1, 1))


def test_clear_visualization_keeps_walls():
    space = GridSpace(3, 3, start=(0, 0), end=(2, 2))
    space.set_wall((0, 2))
    for coord, kind in (((0, 1), VISITED), ((1, 1), FRONTIER), ((1, 0), PATH)):
        assert space.mark(coord, kind)
    assert not space.mark((0, 2), VISITED)
    assert not space.mark((0, 0), PATH)
    space.clear_visualization()
    assert space.cell((0, 2)) == WALL
    assert space.cell((0, 1)) == space.cell((1, 1)) == space.cell((1, 0)) == EMPTY
    space.clear_walls()
    assert space.walkable_count() == 9


def test_grid_rejects_bad_endpoints():
    with pytest.raises(InvalidEndpointError):
        GridSpace(3, 3, start=(3, 0), end=(2, 2))
    with pytest.raises(InvalidEndpointError):
        GridSpace(3, 3, start=(1, 1), end=(1, 1))
    with pytest.raises(InvalidEndpointError):
        GridSpace.from_rows([[0, 1], [0, 0]], start=(0, 0), end=(0, 1))


def test_snapshot_is_independent():
    space = GridSpace(3, 3, start=(0, 0), end=(2, 2))
    copy = space.snapshot()
    space.set_wall((1, 1))
    assert not copy.is_blocked((1, 1))


def test_grid_interpolate_rounds_halves_up():
    space = GridSpace(5, 5, start=(0, 0), end=(4, 4))
    assert space.interpolate((0, 0), (1, 2)) == [(1, 1), (1, 2)]
    assert space.interpolate((0, 0), (0, 3)) == [(0, 1), (0, 2), (0, 3)]
    assert space.interpolate((2, 2), (2, 2)) == []


def test_grid_sample_walkable():
    space = GridSpace.from_rows([[0, 1, 0], [1, 1, 0], [0, 0, 0]], start=(0, 0), end=(2, 2))
    picks = space.sample_walkable(np.random.default_rng(3), 10, exclude=[(0, 0)])
    assert len(picks) == len(set(picks)) == 5
    assert all(space.is_walkable(p) and p != (0, 0) for p in picks)


def test_geo_offset_and_key():
    bounds = GeoBounds(40.0, 40.01, -74.01, -74.0)
    space = GeoSpace(bounds)
    assert space.offset((40.005, -74.005), -1, 0) == (40.006, -74.005)
    assert space.offset((40.005, -74.005), 0, 1) == (40.005, -74.004)
    assert space.key((40.0050000001, -74.0049999999)) == (40.005, -74.005)


def test_geo_obstacles_and_bounds():
    bounds = GeoBounds(40.0, 40.002, -74.002, -74.0)
    space = GeoSpace(bounds, obstacles=[(40.001, -74.001)])
    assert space.is_blocked((40.0010000002, -74.001))
    assert not space.is_walkable((40.003, -74.001))
    assert space.neighbors((40.001, -74.0)) == [(40.002, -74.0), (40.0, -74.0)]


def test_geo_goal_tolerance():
    space = GeoSpace(GeoBounds(0.0, 1.0, 0.0, 1.0))
    assert space.is_goal((0.5, 0.5), (0.5004, 0.4996))
    assert not space.is_goal((0.5, 0.5), (0.5006, 0.5))


def test_geo_bounds_around():
    bounds = GeoBounds.around((40.0, -74.0), (40.01, -74.02))
    assert bounds.min_lat == pytest.approx(39.98)
    assert bounds.max_lat == pytest.approx(40.03)
    assert bounds.min_lng == pytest.approx(-74.04)
    assert bounds.max_lng == pytest.approx(-73.98)


def test_geo_step_cost_is_manhattan_degrees():
    space = GeoSpace(GeoBounds(0.0, 1.0, 0.0, 1.0))
    assert space.step_cost((0.5, 0.5), (0.501, 0.501)) == pytest.approx(0.002)


def test_geo_sample_walkable_is_seeded():
    space = GeoSpace(GeoBounds(40.0, 40.01, -74.01, -74.0))
    first = space.sample_walkable(np.random.default_rng(5), 4)
    second = space.sample_walkable(np.random.default_rng(5), 4)
    assert first == second
    assert len(first) == 4
