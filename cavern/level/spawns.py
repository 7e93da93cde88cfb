"""Spawn point selection for the beacon, the player, enemy spawners and enemies.

Every procedure scans the grid in row-major order, collects the qualifying
coordinates and then picks one with ``stream.draw() % len(candidates)``.

Beacon and player placement run once while a session is built and must
succeed: an empty candidate list raises :class:`SpawnLocationError` and the
caller rerolls the whole level. Spawner and enemy placement run during live
play where an empty candidate list is an ordinary ``None``.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional

from .grid import Coord, Grid
from .pathfinding import pathfind
from .tiles import FLOOR, SPAWNER, WALL

BEACON_THRESHOLD = 30
BEACON_WINDOW = 3  # window spans [c-3, c+3) on both axes
PLAYER_RADIUS = 10


class SpawnLocationError(RuntimeError):
    """No cell qualifies for a spawn that the level cannot do without."""

    def __init__(self, what: str, message: str = "No spawnable spaces"):
        super().__init__(f"{message} for {what}")
        self.what = what


class EnemyRoute(NamedTuple):
    spawn: Coord
    waypoints: List[Coord]
    cost: int


def _pick(stream, candidates: List[Coord]) -> Coord:
    return candidates[stream.draw() % len(candidates)]


def openness(grid: Grid, coord: Coord, half: int = BEACON_WINDOW) -> int:
    """``#floor - #wall`` over the square window ``[c-half, c+half)``."""
    score = 0
    for y in range(coord.y - half, coord.y + half):
        for x in range(coord.x - half, coord.x + half):
            cell = grid.get((x, y))
            if cell == FLOOR:
                score += 1
            elif cell == WALL:
                score -= 1
    return score


def _open_block(grid: Grid, coord: Coord) -> bool:
    x, y = coord
    return all(grid.get(c) == FLOOR for c in ((x - 1, y - 1), (x - 1, y), (x, y - 1), (x, y)))


def beacon_candidates(grid: Grid, threshold: int = BEACON_THRESHOLD) -> List[Coord]:
    out = []
    for y in range(grid.height // 4, grid.height * 3 // 4):
        for x in range(grid.width // 4, grid.width * 3 // 4):
            c = Coord(x, y)
            if openness(grid, c) > threshold and _open_block(grid, c):
                out.append(c)
    return out


def find_beacon_spawn(grid: Grid, stream, threshold: int = BEACON_THRESHOLD) -> Coord:
    candidates = beacon_candidates(grid, threshold)
    if not candidates:
        raise SpawnLocationError("beacon")
    return _pick(stream, candidates)


def player_candidates(grid: Grid, beacon: Coord, radius: int = PLAYER_RADIUS) -> List[Coord]:
    bx, by = beacon
    return [
        Coord(x, y)
        for y in range(by - radius, by + radius + 1)
        for x in range(bx - radius, bx + radius + 1)
        if grid.get((x, y)) == FLOOR
    ]


def find_player_spawn(grid: Grid, beacon: Coord, stream, radius: int = PLAYER_RADIUS) -> Coord:
    candidates = player_candidates(grid, beacon, radius)
    if not candidates:
        raise SpawnLocationError("player")
    return _pick(stream, candidates)


def spawner_candidates(grid: Grid) -> List[Coord]:
    out = []
    for c in grid.coords():
        if grid.get(c) != WALL:
            continue
        if any(grid.get(n) in (FLOOR, SPAWNER) for n in c.neighbors4()):
            out.append(c)
    return out


def create_spawner(grid: Grid, stream, spawners: List[Coord]) -> Optional[Coord]:
    """Turn a random floor-facing wall into a spawner; None when nothing qualifies."""
    candidates = spawner_candidates(grid)
    if not candidates:
        return None
    pos = _pick(stream, candidates)
    grid.cells[pos] = SPAWNER
    spawners.append(pos)
    return pos


def maybe_create_spawner(grid: Grid, stream, spawners: List[Coord], chance: int) -> Optional[Coord]:
    """One-in-``chance`` gate around :func:`create_spawner` for live play."""
    if stream.draw() % chance != 0:
        return None
    return create_spawner(grid, stream, spawners)


def find_enemy_spawn(grid: Grid, stream) -> Optional[Coord]:
    candidates = grid.positions(FLOOR)
    if not candidates:
        return None
    return _pick(stream, candidates)


def plan_enemy_route(grid: Grid, stream, beacon: Coord) -> Optional[EnemyRoute]:
    """Pick an enemy spawn and route it to the beacon; None if either step fails."""
    spawn = find_enemy_spawn(grid, stream)
    if spawn is None:
        return None
    found = pathfind(grid, spawn, beacon)
    if found is None:
        return None
    waypoints, cost = found
    return EnemyRoute(spawn, waypoints, cost)


__all__ = [
    "BEACON_THRESHOLD",
    "PLAYER_RADIUS",
    "SpawnLocationError",
    "EnemyRoute",
    "openness",
    "beacon_candidates",
    "find_beacon_spawn",
    "player_candidates",
    "find_player_spawn",
    "spawner_candidates",
    "create_spawner",
    "maybe_create_spawner",
    "find_enemy_spawn",
    "plan_enemy_route",
]
