"""Cellular-automaton cave layout.

Roughly half the cells start as walls; a Game-of-Life style rule then relaxes
the wall pattern for a fixed number of generations. Only walls carry state
while relaxing: an absent coordinate is simply "not a wall yet" and becomes
floor once relaxation finishes.
"""
from __future__ import annotations

from collections import Counter

from .grid import Coord, Grid
from .tiles import FLOOR, WALL


def seed_walls(width: int, height: int, stream) -> Grid:
    """Insert a wall wherever a row-major draw is odd; leave the rest absent."""
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            if stream.draw() % 2 == 1:
                grid.cells[Coord(x, y)] = WALL
    return grid


def neighbour_counts(grid: Grid) -> Counter:
    counts: Counter = Counter()
    for coord in grid.cells:
        counts.update(coord.neighbors8())
    return counts


def generation(grid: Grid) -> Grid:
    """Return the next generation of a wall-only grid (built synchronously)."""
    nxt = Grid(grid.width, grid.height)
    for coord, cnt in neighbour_counts(grid).items():
        if cnt == 3 or (cnt == 2 and coord in grid.cells):
            nxt.cells[coord] = WALL
    return nxt


def iterate(grid: Grid, iterations: int) -> Grid:
    for _ in range(iterations):
        grid = generation(grid)
    return grid


def fill_floor(grid: Grid) -> Grid:
    """Fill absent in-bounds cells with floor; drop walls that drifted out of bounds."""
    filled = Grid(grid.width, grid.height)
    for coord in grid.coords():
        filled.cells[coord] = grid.cells.get(coord, FLOOR)
    return filled


def generate_layout(width: int, height: int, stream, iterations: int = 5) -> Grid:
    grid = seed_walls(width, height, stream)
    grid = iterate(grid, iterations)
    return fill_floor(grid)


__all__ = ["seed_walls", "neighbour_counts", "generation", "iterate", "fill_floor", "generate_layout"]
