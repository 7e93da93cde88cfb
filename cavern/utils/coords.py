"""Compact encoding of coordinate paths.

Format strategy:
  - Raw form: semicolon separated 'x,y' pairs in path order.
  - Delta form: the first pair absolute, every later pair as the difference
    from its predecessor, joined by '|' and prefixed with 'D:'.
  - The encoder returns whichever form is shorter.

Unlike an unordered tile set, a path is never sorted: step order is the point.
Path steps move one cell at a time, so most delta tokens are '1,0' style
pairs and the delta form wins for anything longer than a few steps.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from cavern.level.grid import Coord


def _raw(path: List[Tuple[int, int]]) -> str:
    return ";".join(f"{x},{y}" for x, y in path)


def encode_path(path: Iterable[Tuple[int, int]]) -> str:
    """Return the shorter of the raw and ``D:`` delta encodings of ``path``."""
    path = [(int(x), int(y)) for x, y in path]
    if not path:
        return ""
    raw = _raw(path)
    pieces = []
    prev_x, prev_y = None, None
    for x, y in path:
        if prev_x is None:
            pieces.append(f"{x},{y}")
        else:
            pieces.append(f"{x-prev_x},{y-prev_y}")
        prev_x, prev_y = x, y
    compressed = "D:" + "|".join(pieces)
    return compressed if len(compressed) < len(raw) else raw


def decode_path(data: str) -> List[Coord]:
    """Inverse of :func:`encode_path`; accepts either form.

    Returns an empty list for empty or malformed input; callers treat that as a
    failed decode.
    """
    if not data:
        return []
    try:
        if not data.startswith("D:"):
            out = []
            for part in data.split(";"):
                x_s, y_s = part.split(",")
                out.append(Coord(int(x_s), int(y_s)))
            return out
        coords: List[Coord] = []
        for token in data[2:].split("|"):
            x_s, y_s = token.split(",")
            dx, dy = int(x_s), int(y_s)
            if not coords:
                coords.append(Coord(dx, dy))
            else:
                px, py = coords[-1]
                coords.append(Coord(px + dx, py + dy))
        return coords
    except ValueError:
        return []


__all__ = ["encode_path", "decode_path"]
