import pytest

from pathviz.pathviz_engine.constants import VISITED, FRONTIER, TOUR_WAYPOINT_CAP
from pathviz.pathviz_engine.envs import open_grid, walled_goal_grid, create_test_environment
from pathviz.pathviz_engine.pacer import Pacer
from pathviz.pathviz_engine.search import SearchEngine
from pathviz.pathviz_engine.space import GridSpace


def test_spanning_tree_covers_open_grid():
    space = open_grid(4)
    result = SearchEngine().run(space, space.start, space.end, 'mst')
    assert result.completed
    assert result.path == ()
    assert result.visited == 16
    assert len(result.edges) == 15
    reached = {space.start} | {child for _, child in result.edges}
    assert len(reached) == 16
    for parent, child in result.edges:
        assert abs(parent[0] - child[0]) + abs(parent[1] - child[1]) == 1


def test_spanning_tree_stays_in_reachable_region():
    space = walled_goal_grid(7)
    result = SearchEngine().run(space, space.start, space.end, 'mst')
    assert result.visited == 40
    assert all(child != space.end for _, child in result.edges)


def test_spanning_tree_grows_in_insertion_order():
    space = GridSpace(2, 2, start=(0, 0), end=(1, 1))
    result = SearchEngine().run(space, space.start, space.end, 'mst')
    assert result.edges == (((0, 0), (1, 0)), ((0, 0), (0, 1)), ((1, 0), (1, 1)))


def test_spanning_tree_skips_goal_in_frontier_reports():
    space = open_grid(3)
    events = []
    SearchEngine().run(space, space.start, space.end, 'mst',
                       pacer=Pacer(time_unit=0, on_step=events.append))
    assert all(e.coord != space.end for e in events if e.kind == FRONTIER)
    assert any(e.coord == space.end for e in events if e.kind == VISITED)


def test_tour_visits_every_waypoint_once():
    space = create_test_environment()
    result = SearchEngine().run(space, space.start, algorithm='tsp', seed=42)
    assert result.completed
    assert result.path[0] == space.start
    assert len(result.path) == TOUR_WAYPOINT_CAP
    assert len(set(result.path)) == len(result.path)
    assert result.visited == len(result.path)
    assert all(space.is_walkable(p) for p in result.path)


def test_tour_is_reproducible_with_a_seed():
    space = create_test_environment()
    first = SearchEngine().run(space, space.start, algorithm='tsp', seed=7)
    second = SearchEngine().run(space, space.start, algorithm='tsp', seed=7)
    assert first.path == second.path


def test_tour_hops_to_the_nearest_waypoint():
    space = create_test_environment()
    tour = SearchEngine().run(space, space.start, algorithm='tsp', seed=3).path
    for i in range(1, len(tour) - 1):
        here = tour[i - 1]
        remaining = tour[i:]
        best = min(space.heuristic(here, p) for p in remaining)
        assert space.heuristic(here, tour[i]) == best


def test_tour_reports_waypoints_then_segments():
    space = open_grid(6)
    events = []
    result = SearchEngine().run(space, space.start, algorithm='tsp', seed=1,
                                pacer=Pacer(time_unit=0, on_step=events.append))
    waypoints = set(result.path)
    frontier = [e.coord for e in events if e.kind == FRONTIER]
    assert set(frontier) == waypoints - {space.start}
    assert events[:len(frontier)] == [e for e in events if e.kind == FRONTIER]
    assert all(e.coord not in waypoints for e in events if e.kind == VISITED)


def test_tour_on_tiny_grid_uses_all_cells():
    space = GridSpace(1, 3, start=(0, 0), end=(0, 2))
    result = SearchEngine().run(space, space.start, algorithm='tsp', seed=0)
    assert result.path == ((0, 0), (0, 1), (0, 2))


def test_path_algorithms_need_a_goal():
    space = open_grid(3)
    with pytest.raises(ValueError):
        SearchEngine().run(space, space.start, algorithm='bfs')
