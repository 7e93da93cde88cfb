"""Cave level generation, connectivity, pathfinding and spawn placement."""

from .config import LevelConfig
from .grid import Coord, Grid
from .level import Level
from .pathfinding import pathfind
from .random_stream import DEBUG_SEED, RandomStream, coerce_seed, create_seed, seed_to_hex
from .session import LevelGenerationError, Session, build_session
from .spawns import EnemyRoute, SpawnLocationError
from .tiles import FLOOR, SPAWNER, WALL

__all__ = [
    "Coord",
    "DEBUG_SEED",
    "EnemyRoute",
    "FLOOR",
    "Grid",
    "Level",
    "LevelConfig",
    "LevelGenerationError",
    "RandomStream",
    "SPAWNER",
    "Session",
    "SpawnLocationError",
    "WALL",
    "build_session",
    "coerce_seed",
    "create_seed",
    "pathfind",
    "seed_to_hex",
]
