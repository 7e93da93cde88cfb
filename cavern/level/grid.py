"""Coordinate type and the sparse coordinate -> cell mapping.

The grid is logically bounded to ``[0, width) x [0, height)`` but ``get`` and
``set`` never check bounds: callers stay in range themselves, and reading an
absent coordinate simply yields ``None``.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple


class Coord(NamedTuple):
    x: int
    y: int

    def neighbors4(self) -> List["Coord"]:
        x, y = self
        return [Coord(x - 1, y), Coord(x, y - 1), Coord(x + 1, y), Coord(x, y + 1)]

    def neighbors8(self) -> List["Coord"]:
        x, y = self
        return [
            Coord(x - 1, y - 1), Coord(x, y - 1), Coord(x + 1, y - 1),
            Coord(x - 1, y),                      Coord(x + 1, y),
            Coord(x - 1, y + 1), Coord(x, y + 1), Coord(x + 1, y + 1),
        ]

    def manhattan(self, other: "Coord") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class Grid:
    """Sparse level layout keyed by :class:`Coord`."""

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: Optional[Dict[Coord, str]] = None):
        self.width = width
        self.height = height
        self.cells: Dict[Coord, str] = cells if cells is not None else {}

    def get(self, coord: Tuple[int, int]) -> Optional[str]:
        return self.cells.get(coord)

    def set(self, coord: Tuple[int, int], cell: str) -> None:
        self.cells[Coord(*coord)] = cell

    def __contains__(self, coord) -> bool:
        return coord in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def items(self):
        return self.cells.items()

    def in_bounds(self, coord: Tuple[int, int]) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def coords(self) -> Iterator[Coord]:
        """Yield every in-bounds coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coord(x, y)

    def count(self, cell: str) -> int:
        return sum(1 for c in self.coords() if self.cells.get(c) == cell)

    def positions(self, cell: str) -> List[Coord]:
        return [c for c in self.coords() if self.cells.get(c) == cell]

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, dict(self.cells))

    def to_rows(self, blank: str = " ") -> List[str]:
        """Return one string per row, using ``blank`` for absent cells."""
        return [
            "".join(self.cells.get(Coord(x, y), blank) for x in range(self.width))
            for y in range(self.height)
        ]

    @classmethod
    def from_rows(cls, rows: Iterable[str], blank: str = " ") -> "Grid":
        rows = list(rows)
        height = len(rows)
        width = max((len(r) for r in rows), default=0)
        grid = cls(width, height)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch != blank:
                    grid.cells[Coord(x, y)] = ch
        return grid

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, cells={len(self.cells)})"


__all__ = ["Coord", "Grid"]
