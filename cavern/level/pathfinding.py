"""A* search over a finished level grid.

Only floor and spawner cells can be stepped on, every step costs 1, and the
Manhattan distance heuristic is integer-divided by 3 before it is added to the
search priority. A smaller heuristic never overestimates, so returned paths
are still shortest; it only widens the search.
"""
from __future__ import annotations

import heapq
from itertools import count
from typing import Dict, List, Optional, Tuple

from .grid import Coord, Grid
from .tiles import TRAVERSABLE

HEURISTIC_DIVISOR = 3

PathResult = Tuple[List[Coord], int]


def successors(grid: Grid, coord: Coord) -> List[Tuple[Coord, int]]:
    return [(n, 1) for n in coord.neighbors4() if grid.get(n) in TRAVERSABLE]


def heuristic(coord: Coord, target: Coord) -> int:
    return coord.manhattan(target) // HEURISTIC_DIVISOR


def _rebuild(parents: Dict[Coord, Coord], end: Coord) -> List[Coord]:
    path = [end]
    while path[-1] in parents:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def pathfind(grid: Grid, start, target) -> Optional[PathResult]:
    """Return ``(path, cost)`` from start to target inclusive, or None if unreachable."""
    start, target = Coord(*start), Coord(*target)
    if grid.get(target) not in TRAVERSABLE:
        return None
    if start == target:
        return [start], 0
    tie = count()
    frontier = [(heuristic(start, target), next(tie), 0, start)]
    best: Dict[Coord, int] = {start: 0}
    parents: Dict[Coord, Coord] = {}
    closed = set()
    while frontier:
        _f, _t, cost, cur = heapq.heappop(frontier)
        if cur == target:
            return _rebuild(parents, cur), cost
        if cur in closed:
            continue
        closed.add(cur)
        for nxt, step in successors(grid, cur):
            if nxt in closed:
                continue
            new_cost = cost + step
            if new_cost < best.get(nxt, new_cost + 1):
                best[nxt] = new_cost
                parents[nxt] = cur
                heapq.heappush(frontier, (new_cost + heuristic(nxt, target), next(tie), new_cost, nxt))
    return None


__all__ = ["pathfind", "successors", "heuristic", "HEURISTIC_DIVISOR", "PathResult"]
