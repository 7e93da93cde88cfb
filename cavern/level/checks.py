"""Structural checks for finished levels.

Used by the diagnostics script and the test suite. Nothing here mutates the
level; the report is a plain dict so it can be printed or serialised as is.
"""
from __future__ import annotations

from typing import Dict, List

from .connectivity import components
from .edges import is_border
from .grid import Coord, Grid
from .tiles import FLOOR, SPAWNER, WALL

_KNOWN = {FLOOR, WALL, SPAWNER}

# Seeds checked when a diagnostics run is given none
DEFAULT_SEEDS = ["debug", "292372", "730727"]


def border_violations(grid: Grid) -> List[Coord]:
    return [c for c in grid.coords() if is_border(grid, c) and grid.get(c) != WALL]


def missing_cells(grid: Grid) -> List[Coord]:
    return [c for c in grid.coords() if grid.get(c) is None]


def unknown_cells(grid: Grid) -> List[Coord]:
    """Cells holding anything other than floor, wall or spawner (e.g. a leaked region label)."""
    return [c for c, cell in grid.items() if cell not in _KNOWN]


def out_of_bounds(grid: Grid) -> List[Coord]:
    return [c for c in grid if not grid.in_bounds(c)]


def analyze(grid: Grid) -> Dict[str, object]:
    """Return a report of every invariant a finished level should satisfy.

    ``floor_components`` counts 4-connected floor components on the sealed
    grid. It can exceed 1 when sealing the border cut a thin corridor that ran
    along the ring; ``sealed_components`` flags that case separately.
    """
    floor_parts = components(grid, (FLOOR,))
    walk_parts = components(grid, (FLOOR, SPAWNER))
    report = {
        "border_violations": len(border_violations(grid)),
        "missing_cells": len(missing_cells(grid)),
        "unknown_cells": len(unknown_cells(grid)),
        "out_of_bounds": len(out_of_bounds(grid)),
        "floor_components": len(floor_parts),
        "walkable_components": len(walk_parts),
        "floor": grid.count(FLOOR),
        "wall": grid.count(WALL),
        "spawner": grid.count(SPAWNER),
    }
    report["sealed_components"] = report["floor_components"] > 1
    report["ok"] = (
        report["border_violations"] == 0
        and report["missing_cells"] == 0
        and report["unknown_cells"] == 0
        and report["out_of_bounds"] == 0
    )
    return report


def diagnose_seed(seed: bytes, config=None, strict: bool = False) -> Dict[str, object]:
    """Generate one level for ``seed`` and report its invariants and spawnability.

    No reroll happens here: a seed that cannot host a beacon or a player is
    reported as such rather than replaced. Floor pockets cut off by sealing are
    always reported; with ``strict`` they also fail the seed.
    """
    from .level import Level
    from .spawns import SpawnLocationError

    level = Level(seed, config)
    report = analyze(level.grid)
    spawn_error = None
    try:
        beacon = level.find_beacon_spawn()
        level.find_player_spawn(beacon)
    except SpawnLocationError as exc:
        spawn_error = exc.what
    return {
        "seed": seed.hex(),
        "issues": report,
        "spawn_error": spawn_error,
        "metrics": level.metrics,
        "ok": report["ok"] and not (strict and report["sealed_components"]),
    }


__all__ = [
    "DEFAULT_SEEDS",
    "analyze",
    "border_violations",
    "diagnose_seed",
    "missing_cells",
    "out_of_bounds",
    "unknown_cells",
]
