from collections import deque

from cavern.level import FLOOR, SPAWNER, WALL, Grid, Level, LevelConfig, Session

WALKABLE = {FLOOR, SPAWNER}


class ScriptedStream:
    """Stand-in for RandomStream that replays fixed draws, then repeats ``default``."""

    def __init__(self, values=(), default=0):
        self.values = list(values)
        self.default = default
        self.draws = 0

    def draw(self):
        self.draws += 1
        if self.values:
            return self.values.pop(0)
        return self.default


def grid(*rows):
    """Build a Grid from picture rows using F/W/S characters."""
    return Grid.from_rows(rows)


def open_room(width, height):
    """A floor rectangle surrounded by a one cell wall ring."""
    rows = []
    for y in range(height):
        if y in (0, height - 1):
            rows.append(WALL * width)
        else:
            rows.append(WALL + FLOOR * (width - 2) + WALL)
    return grid(*rows)


def bfs_reachable(g, start, walk=WALKABLE):
    q = deque([start])
    vis = {start}
    while q:
        cx, cy = q.popleft()
        for dx, dy in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            n = (cx + dx, cy + dy)
            if n not in vis and g.get(n) in walk:
                vis.add(n)
                q.append(n)
    return vis


def open_session(seed, config=None):
    """Deterministic 20x20 open-room session: beacon (5, 5), player (1, 1)."""
    level = Level(seed, LevelConfig(width=20, height=20), stream=ScriptedStream())
    beacon = level.find_beacon_spawn()
    return Session(level=level, beacon=beacon, player=level.find_player_spawn(beacon))


def fake_build_session(seed, config=None, **kwargs):
    return open_session(seed, config)


def floor_parts(g, walk=(FLOOR,)):
    """Split the walkable cells into 4-connected parts with plain BFS."""
    seen = set()
    parts = []
    for c in g.coords():
        if g.get(c) in walk and c not in seen:
            part = bfs_reachable(g, c, set(walk))
            seen |= part
            parts.append(part)
    return parts
