from cavern.level import FLOOR, WALL, Coord, Grid, RandomStream
from cavern.level.automaton import fill_floor, generate_layout, generation, iterate, seed_walls
from cavern.level.random_stream import DEBUG_SEED, coerce_seed
from level_test_utils import ScriptedStream


def _walls(*coords, size=5):
    g = Grid(size, size)
    for c in coords:
        g.set(c, WALL)
    return g


def test_seed_walls_odd_draws_in_row_major_order():
    stream = ScriptedStream([1, 0, 3, 2])
    g = seed_walls(2, 2, stream)
    assert set(g) == {(0, 0), (0, 1)}
    assert stream.draws == 4


def test_block_is_stable():
    block = _walls((2, 2), (3, 2), (2, 3), (3, 3))
    assert generation(block) == block


def test_blinker_oscillates():
    horizontal = _walls((1, 2), (2, 2), (3, 2))
    vertical = generation(horizontal)
    assert set(vertical) == {(2, 1), (2, 2), (2, 3)}
    assert generation(vertical) == horizontal
    assert iterate(horizontal, 2) == horizontal


def test_lonely_wall_dies():
    assert len(generation(_walls((2, 2)))) == 0


def test_walls_may_drift_out_of_bounds_then_get_dropped():
    edge = _walls((1, 0), (2, 0), (3, 0))
    nxt = generation(edge)
    assert Coord(2, -1) in nxt
    filled = fill_floor(nxt)
    assert Coord(2, -1) not in filled
    assert len(filled) == 25
    assert filled.get((2, 0)) == WALL
    assert filled.get((1, 0)) == FLOOR


def test_zero_iterations_only_fills():
    g = generate_layout(4, 4, ScriptedStream([1] * 4), iterations=0)
    assert g.to_rows() == ["WWWW", "FFFF", "FFFF", "FFFF"]


def test_layout_is_deterministic_and_fully_classified():
    a = generate_layout(30, 20, RandomStream(DEBUG_SEED))
    b = generate_layout(30, 20, RandomStream(DEBUG_SEED))
    assert a == b
    assert len(a) == 30 * 20
    assert {cell for _, cell in a.items()} <= {FLOOR, WALL}


def test_layout_depends_on_seed():
    a = generate_layout(30, 30, RandomStream(DEBUG_SEED))
    b = generate_layout(30, 30, RandomStream(coerce_seed("other")))
    assert a != b
