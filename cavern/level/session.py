"""Game session construction with reroll-on-failure.

A session is a finished level plus the beacon and player spawn points and the
enemy routes planned so far. Building one can fail when the cave has no open
enough area for the beacon (or nothing walkable near it for the player); the
recovery is to throw the whole level away and try again with a fresh random
seed, never to patch the grid in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..logging_utils import get_logger
from .config import LevelConfig
from .grid import Coord
from .level import Level
from .random_stream import create_seed
from .spawns import EnemyRoute, SpawnLocationError

_log = get_logger("session")


class LevelGenerationError(RuntimeError):
    """Every construction attempt failed spawn placement."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        super().__init__(f"level construction failed after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


@dataclass
class Session:
    level: Level
    beacon: Coord
    player: Coord
    attempts: int = 1
    enemies: List[EnemyRoute] = field(default_factory=list)

    @property
    def seed(self) -> bytes:
        return self.level.seed

    @property
    def spawners(self) -> List[Coord]:
        return self.level.spawners

    def spawn_enemy(self) -> Optional[EnemyRoute]:
        route = self.level.plan_enemy_route(self.beacon)
        if route is not None:
            self.enemies.append(route)
        return route

    def to_dict(self) -> dict:
        lvl = self.level
        return {
            "seed": lvl.seed.hex(),
            "width": lvl.width,
            "height": lvl.height,
            "rows": lvl.to_rows(),
            "beacon": list(self.beacon),
            "player": list(self.player),
            "spawners": [list(s) for s in lvl.spawners],
            "attempts": self.attempts,
            "metrics": lvl.metrics,
        }


def new_session(seed: bytes, config: Optional[LevelConfig] = None) -> Session:
    """Build a level and place beacon then player; raises SpawnLocationError."""
    level = Level(seed, config)
    beacon = level.find_beacon_spawn()
    player = level.find_player_spawn(beacon)
    return Session(level=level, beacon=beacon, player=player)


def build_session(
    seed: Optional[bytes] = None,
    config: Optional[LevelConfig] = None,
    *,
    debug: bool = False,
    max_attempts: Optional[int] = None,
) -> Session:
    """Build a session, rerolling with fresh non-debug seeds on placement failure."""
    config = config or LevelConfig()
    max_attempts = max_attempts or config.max_attempts
    if seed is None:
        seed = create_seed(debug or config.debug_seed)
    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            session = new_session(seed, config)
        except SpawnLocationError as exc:
            last_error = exc
            _log.warn(event="level_reroll", attempt=attempt, seed=seed.hex()[:16], reason=exc.what)
            seed = create_seed(False)
            continue
        session.attempts = attempt
        _log.info(
            event="session_built",
            seed=seed.hex()[:16],
            attempts=attempt,
            beacon=f"{session.beacon.x},{session.beacon.y}",
        )
        return session
    raise LevelGenerationError(max_attempts, last_error)


__all__ = ["Session", "LevelGenerationError", "new_session", "build_session"]
