"""Level construction pipeline.

A Level owns the grid, its dimensions, the random stream and the spawner
list. Construction runs the generation phases in a fixed order:

    * seed walls from the stream and relax them with the cave automaton;
    * fill the remaining cells with floor;
    * keep only the largest floor region (everything else becomes wall);
    * seal the outer ring with wall.

Sealing deliberately runs after the connectivity pass, so a floor cell on the
ring can be walled off after the single-region check; ``checks.analyze``
reports whether that split the open area.

The stream keeps advancing after generation: spawn placement draws from the
same stream, so a seed reproduces both the layout and the spawn choices.

Public contract consumed elsewhere:
    Level(seed: bytes, config: LevelConfig | None = None)
    Attributes: grid, width, height, stream, seed, spawners, metrics
"""
from __future__ import annotations

import time
from typing import List, Optional

from ..logging_utils import get_logger
from .automaton import fill_floor, iterate, seed_walls
from .config import LevelConfig
from .connectivity import enforce_single_region
from .edges import seal_edges
from .grid import Coord, Grid
from .metrics import init_metrics
from .pathfinding import PathResult, pathfind
from .random_stream import SEED_LENGTH, RandomStream
from .spawns import (
    EnemyRoute,
    create_spawner,
    find_beacon_spawn,
    find_player_spawn,
    maybe_create_spawner,
    plan_enemy_route,
)
from .tiles import FLOOR, WALL, is_traversable

_log = get_logger("level")


class Level:
    def __init__(self, seed: bytes, config: Optional[LevelConfig] = None, *, stream=None):
        self.config = config or LevelConfig()
        self.seed = bytes(seed)
        if len(self.seed) != SEED_LENGTH:
            raise ValueError(f"seed must be {SEED_LENGTH} bytes, got {len(self.seed)}")
        self.width = self.config.width
        self.height = self.config.height
        # Any object with draw() works; tests pass scripted streams here
        self.stream = stream if stream is not None else RandomStream(self.seed)
        self.spawners: List[Coord] = []
        self.metrics = init_metrics()
        self.grid = self._run_pipeline()

    def _run_pipeline(self) -> Grid:
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        grid = _phase("seed_walls", seed_walls, self.width, self.height, self.stream)
        self.metrics["walls_seeded"] = len(grid)
        grid = _phase("automaton", iterate, grid, self.config.iterations)
        grid = _phase("fill_floor", fill_floor, grid)
        summary = _phase("connectivity", enforce_single_region, grid)
        _phase("seal_edges", seal_edges, grid)

        self.metrics["regions"] = summary.regions
        self.metrics["largest_region"] = summary.largest
        self.metrics["cells_demoted"] = summary.demoted
        self.metrics["tiles_floor"] = grid.count(FLOOR)
        self.metrics["tiles_wall"] = grid.count(WALL)
        self.metrics["phase_ms"] = phase_times
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        _log.debug(
            event="level_generated",
            seed=self.seed.hex()[:16],
            size=f"{self.width}x{self.height}",
            regions=summary.regions,
            floor=self.metrics["tiles_floor"],
            runtime_ms=self.metrics["runtime_ms"],
        )
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, coord) -> Optional[str]:
        return self.grid.get(coord)

    def is_walkable(self, coord) -> bool:
        return self.grid.in_bounds(coord) and is_traversable(self.grid.get(coord))

    def pathfind(self, start, target) -> Optional[PathResult]:
        return pathfind(self.grid, start, target)

    # ------------------------------------------------------------------
    # Spawn placement (draws from the level stream)
    # ------------------------------------------------------------------
    def find_beacon_spawn(self) -> Coord:
        return find_beacon_spawn(self.grid, self.stream, self.config.beacon_threshold)

    def find_player_spawn(self, beacon: Coord) -> Coord:
        return find_player_spawn(self.grid, beacon, self.stream, self.config.player_radius)

    def create_spawner(self) -> Optional[Coord]:
        pos = create_spawner(self.grid, self.stream, self.spawners)
        self.metrics["spawners"] = len(self.spawners)
        return pos

    def maybe_create_spawner(self, chance: Optional[int] = None) -> Optional[Coord]:
        chance = chance or self.config.spawner_chance
        pos = maybe_create_spawner(self.grid, self.stream, self.spawners, chance)
        self.metrics["spawners"] = len(self.spawners)
        return pos

    def plan_enemy_route(self, beacon: Coord) -> Optional[EnemyRoute]:
        return plan_enemy_route(self.grid, self.stream, beacon)

    def to_rows(self) -> List[str]:
        return self.grid.to_rows()

    def __repr__(self) -> str:
        return f"Level(seed={self.seed.hex()[:12]}..., size={self.width}x{self.height})"


__all__ = ["Level"]
