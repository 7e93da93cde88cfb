import pytest

import cavern.level.session as session_mod
from cavern.level import DEBUG_SEED, LevelConfig, LevelGenerationError, build_session
from cavern.level.session import new_session
from cavern.level.spawns import SpawnLocationError
from level_test_utils import open_session


def _outcome(seed):
    try:
        s = new_session(seed)
    except SpawnLocationError as exc:
        return ("failed", exc.what)
    return (s.beacon, s.player, tuple(s.level.to_rows()))


def test_new_session_deterministic():
    assert _outcome(DEBUG_SEED) == _outcome(DEBUG_SEED)


def test_reroll_with_fresh_seeds(monkeypatch):
    seen = []

    def flaky(seed, config=None):
        seen.append(seed)
        if len(seen) < 3:
            raise SpawnLocationError("beacon")
        return open_session(seed)

    monkeypatch.setattr(session_mod, "new_session", flaky)
    s = build_session(DEBUG_SEED)
    assert s.attempts == 3
    assert seen[0] == DEBUG_SEED
    assert DEBUG_SEED not in seen[1:]
    assert len(set(seen)) == 3
    assert s.seed == seen[-1]


def test_debug_flag_starts_from_debug_seed(monkeypatch):
    seen = []
    monkeypatch.setattr(session_mod, "new_session", lambda seed, config=None: seen.append(seed) or open_session(seed))
    s = build_session(debug=True)
    assert seen == [DEBUG_SEED]
    assert s.attempts == 1


def test_exhausted_attempts_raise(monkeypatch):
    def always_fail(seed, config=None):
        raise SpawnLocationError("player")

    monkeypatch.setattr(session_mod, "new_session", always_fail)
    with pytest.raises(LevelGenerationError) as exc:
        build_session(max_attempts=4)
    assert exc.value.attempts == 4
    assert isinstance(exc.value.last_error, SpawnLocationError)
    assert exc.value.last_error.what == "player"


def test_config_max_attempts_used(monkeypatch):
    calls = []

    def always_fail(seed, config=None):
        calls.append(seed)
        raise SpawnLocationError("beacon")

    monkeypatch.setattr(session_mod, "new_session", always_fail)
    with pytest.raises(LevelGenerationError):
        build_session(config=LevelConfig(max_attempts=2))
    assert len(calls) == 2


def test_real_build_produces_spawnable_session():
    s = build_session(DEBUG_SEED)
    g = s.level.grid
    assert g.get(s.beacon) == "F"
    assert g.get(s.player) == "F"
    assert abs(s.player.x - s.beacon.x) <= 10 and abs(s.player.y - s.beacon.y) <= 10
    assert s.attempts >= 1


def test_session_dict_and_enemies():
    s = open_session(DEBUG_SEED)
    d = s.to_dict()
    assert d["seed"] == DEBUG_SEED.hex()
    assert len(d["seed"]) == 64
    assert (d["width"], d["height"]) == (20, 20)
    assert d["beacon"] == [5, 5] and d["player"] == [1, 1]
    assert d["spawners"] == []
    assert len(d["rows"]) == 20
    route = s.spawn_enemy()
    assert route.cost == 8
    assert s.enemies == [route]
