import pytest

from cavern.level import FLOOR, SPAWNER, WALL, Level, LevelConfig
from cavern.level.checks import analyze
from cavern.level.edges import is_border
from cavern.level.random_stream import DEBUG_SEED, coerce_seed
from level_test_utils import ScriptedStream, floor_parts, open_room

SEEDS = [DEBUG_SEED, coerce_seed(1), coerce_seed("cavern"), coerce_seed(314159)]


def test_same_seed_same_level():
    a, b = Level(DEBUG_SEED), Level(DEBUG_SEED)
    assert a.grid == b.grid
    for key in ("walls_seeded", "regions", "largest_region", "cells_demoted", "tiles_floor", "tiles_wall"):
        assert a.metrics[key] == b.metrics[key]


@pytest.mark.parametrize("seed", SEEDS)
def test_finished_grid_invariants(seed):
    level = Level(seed)
    g = level.grid
    assert (level.width, level.height) == (50, 50)
    assert len(g) == 50 * 50
    for c in g.coords():
        cell = g.get(c)
        assert cell in (FLOOR, WALL)
        if is_border(g, c):
            assert cell == WALL
    report = analyze(g)
    assert report["ok"], report


def test_metrics_filled():
    level = Level(DEBUG_SEED)
    m = level.metrics
    assert m["tiles_floor"] + m["tiles_wall"] == 50 * 50
    assert m["walls_seeded"] > 0
    assert m["regions"] >= 1
    assert set(m["phase_ms"]) == {"seed_walls", "automaton", "fill_floor", "connectivity", "seal_edges"}
    assert m["spawners"] == 0


def test_stream_shared_with_spawn_placement():
    level = Level(DEBUG_SEED, LevelConfig(width=20, height=30))
    assert level.stream.draws == 20 * 30
    level.create_spawner()
    assert level.stream.draws == 20 * 30 + 1


def test_injected_stream_without_walls_yields_open_room():
    level = Level(DEBUG_SEED, LevelConfig(width=20, height=20), stream=ScriptedStream())
    assert level.grid == open_room(20, 20)
    assert level.metrics["regions"] == 1
    assert level.metrics["cells_demoted"] == 0
    assert level.is_walkable((1, 1))
    assert not level.is_walkable((0, 0))
    assert not level.is_walkable((-1, 5))


def test_level_spawn_helpers():
    level = Level(DEBUG_SEED, LevelConfig(width=20, height=20), stream=ScriptedStream())
    beacon = level.find_beacon_spawn()
    assert beacon == (5, 5)
    assert level.find_player_spawn(beacon) == (1, 1)
    assert level.pathfind((1, 1), beacon)[1] == 8
    pos = level.create_spawner()
    assert level.get(pos) == SPAWNER
    assert level.spawners == [pos]
    assert level.metrics["spawners"] == 1
    assert level.maybe_create_spawner(chance=1) == (0, 0)
    assert level.metrics["spawners"] == 2
    route = level.plan_enemy_route(beacon)
    assert route.waypoints[-1] == beacon


def test_small_config():
    level = Level(coerce_seed("tiny"), LevelConfig(width=8, height=6, iterations=2))
    assert len(level.to_rows()) == 6
    assert all(len(r) == 8 for r in level.to_rows())
    assert "8x6" in repr(level)


@pytest.mark.parametrize("seed", [b"test", b"x", DEBUG_SEED + b"\x00"])
def test_short_or_long_seed_rejected_even_with_stream(seed):
    with pytest.raises(ValueError):
        Level(seed, LevelConfig(width=20, height=20), stream=ScriptedStream())


@pytest.mark.parametrize("seed", SEEDS)
def test_single_region_before_sealing_and_splits_only_at_ring(seed, monkeypatch):
    import cavern.level.level as level_mod

    before = {}
    real_seal = level_mod.seal_edges

    def recording_seal(grid):
        before["parts"] = floor_parts(grid)
        return real_seal(grid)

    monkeypatch.setattr(level_mod, "seal_edges", recording_seal)
    level = Level(seed)
    assert len(before["parts"]) == 1

    g = level.grid
    parts = floor_parts(g)
    assert parts
    if len(parts) > 1:
        # sealing only walls off ring 0, so each piece it leaves behind was
        # attached through a cell on ring 1
        for part in parts:
            assert any(x in (1, g.width - 2) or y in (1, g.height - 2) for x, y in part)
