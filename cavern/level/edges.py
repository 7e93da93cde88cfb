from .grid import Coord, Grid
from .tiles import WALL


def seal_edges(grid: Grid) -> Grid:
    """Overwrite the four border lines with wall so nothing can leave the level."""
    w, h = grid.width, grid.height
    for x in range(w):
        grid.cells[Coord(x, 0)] = WALL
        grid.cells[Coord(x, h - 1)] = WALL
    for y in range(h):
        grid.cells[Coord(0, y)] = WALL
        grid.cells[Coord(w - 1, y)] = WALL
    return grid


def is_border(grid: Grid, coord) -> bool:
    x, y = coord
    return x in (0, grid.width - 1) or y in (0, grid.height - 1)


__all__ = ["seal_edges", "is_border"]
