"""Single-region connectivity enforcement and flood-fill helpers.

Every floor cell is labelled with a region id in a local label map (never in
the grid itself), the largest region is kept, and every other region is
demoted to wall. Flood fills use an explicit stack so large open caves do not
hit recursion limits.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Set

from .grid import Coord, Grid
from .tiles import FLOOR, TRAVERSABLE, WALL


class RegionSummary(NamedTuple):
    regions: int
    largest: int
    demoted: int


def _fill_region(grid: Grid, start: Coord, region: int, labels: Dict[Coord, int]) -> int:
    stack = [start]
    labels[start] = region
    size = 0
    while stack:
        cur = stack.pop()
        size += 1
        for nxt in cur.neighbors4():
            if nxt not in labels and grid.get(nxt) == FLOOR:
                labels[nxt] = region
                stack.append(nxt)
    return size


def label_regions(grid: Grid):
    """Return ``(labels, sizes)`` for every 4-connected floor region.

    Regions are numbered in the row-major order of their first cell.
    """
    labels: Dict[Coord, int] = {}
    sizes: Dict[int, int] = {}
    region = 0
    for coord in grid.coords():
        if grid.get(coord) == FLOOR and coord not in labels:
            sizes[region] = _fill_region(grid, coord, region, labels)
            region += 1
    return labels, sizes


def largest_region(sizes: Dict[int, int]) -> int:
    """Id of the strictly largest region; the first seen wins ties. -1 if none."""
    best, best_count = -1, -1
    for region in sorted(sizes):
        if sizes[region] > best_count:
            best, best_count = region, sizes[region]
    return best


def enforce_single_region(grid: Grid) -> RegionSummary:
    """Keep the largest floor region and wall off the rest, in place."""
    labels, sizes = label_regions(grid)
    keep = largest_region(sizes)
    demoted = 0
    for coord in grid.coords():
        region = labels.get(coord)
        if region is None or region == keep:
            continue
        grid.cells[coord] = WALL
        demoted += 1
    return RegionSummary(regions=len(sizes), largest=sizes.get(keep, 0), demoted=demoted)


def flood_reachable(grid: Grid, start: Coord, walkable: Iterable[str] = TRAVERSABLE) -> Set[Coord]:
    """Breadth-first set of cells reachable from ``start`` over ``walkable`` cells."""
    walk = set(walkable)
    if grid.get(start) not in walk:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        cur = q.popleft()
        for nxt in cur.neighbors4():
            if nxt not in vis and grid.get(nxt) in walk:
                vis.add(nxt)
                q.append(nxt)
    return vis


def components(grid: Grid, walkable: Iterable[str] = (FLOOR,)) -> List[Set[Coord]]:
    """All 4-connected components of ``walkable`` cells, in row-major discovery order."""
    walk = set(walkable)
    seen: Set[Coord] = set()
    out: List[Set[Coord]] = []
    for coord in grid.coords():
        if coord in seen or grid.get(coord) not in walk:
            continue
        comp = flood_reachable(grid, coord, walk)
        seen |= comp
        out.append(comp)
    return out


__all__ = [
    "RegionSummary",
    "label_regions",
    "largest_region",
    "enforce_single_region",
    "flood_reachable",
    "components",
]
