# Cell classifications stored in a Grid
FLOOR = "F"
WALL = "W"
SPAWNER = "S"

# Cells an entity may step onto
TRAVERSABLE = frozenset({FLOOR, SPAWNER})


def is_traversable(cell) -> bool:
    return cell in TRAVERSABLE


__all__ = ["FLOOR", "WALL", "SPAWNER", "TRAVERSABLE", "is_traversable"]
