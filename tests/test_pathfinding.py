from cavern.level import SPAWNER, pathfind
from cavern.level.pathfinding import heuristic, successors
from cavern.level.grid import Coord
from level_test_utils import WALKABLE, bfs_reachable, grid, open_room

GATE = (
    "FFFFF",
    "FFFFF",
    "WWFWW",
    "FFFFF",
    "FFFFF",
)

SNAKE = (
    "FFFFF",
    "WWWWF",
    "FFFFF",
    "FWWWW",
    "FFFFF",
)


def _assert_valid(g, path, start, target):
    assert path[0] == start and path[-1] == target
    for a, b in zip(path, path[1:]):
        assert Coord(*a).manhattan(Coord(*b)) == 1
        assert g.get(b) in WALKABLE


def test_route_through_single_gap():
    g = grid(*GATE)
    path, cost = pathfind(g, (0, 0), (4, 4))
    assert cost == 8
    assert len(path) == 9
    assert (2, 2) in path
    _assert_valid(g, path, (0, 0), (4, 4))


def test_wall_target_is_none():
    assert pathfind(grid(*GATE), (0, 0), (0, 2)) is None


def test_out_of_bounds_target_is_none():
    assert pathfind(grid(*GATE), (0, 0), (9, 9)) is None


def test_disconnected_is_none():
    g = grid("FWF", "FWF", "FWF")
    assert pathfind(g, (0, 0), (2, 2)) is None


def test_start_equals_target():
    assert pathfind(grid(*GATE), (1, 1), (1, 1)) == ([(1, 1)], 0)


def test_spawners_are_walkable():
    g = grid("FSF")
    assert g.get((1, 0)) == SPAWNER
    path, cost = pathfind(g, (0, 0), (2, 0))
    assert cost == 2 and path == [(0, 0), (1, 0), (2, 0)]


def test_snake_cost_matches_breadth_first_distance():
    g = grid(*SNAKE)
    path, cost = pathfind(g, (0, 0), (4, 4))
    assert cost == 16
    _assert_valid(g, path, (0, 0), (4, 4))
    assert (4, 4) in bfs_reachable(g, (0, 0))


def test_open_room_terminates_with_shortest_cost():
    g = open_room(30, 30)
    path, cost = pathfind(g, (1, 1), (28, 27))
    assert cost == 27 + 26
    _assert_valid(g, path, (1, 1), (28, 27))


def test_heuristic_is_manhattan_over_three():
    assert heuristic(Coord(0, 0), Coord(4, 4)) == 2
    assert heuristic(Coord(0, 0), Coord(1, 1)) == 0


def test_successors_unit_cost_only_walkable():
    g = grid("FWF", "FFS", "WWW")
    assert successors(g, Coord(1, 1)) == [((0, 1), 1), ((2, 1), 1)]
