import os
from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass
class LevelConfig:
    width: int = 50
    height: int = 50
    iterations: int = 5
    beacon_threshold: int = 30
    player_radius: int = 10
    spawner_chance: int = 100
    max_attempts: int = 10
    debug_seed: bool = False

    # LevelConfig field -> Flask config key / CAVERN_* env var suffix
    _KEYS = {
        "width": "LEVEL_WIDTH",
        "height": "LEVEL_HEIGHT",
        "iterations": "LEVEL_ITERATIONS",
        "beacon_threshold": "BEACON_THRESHOLD",
        "player_radius": "PLAYER_RADIUS",
        "spawner_chance": "SPAWNER_CHANCE",
        "max_attempts": "LEVEL_MAX_ATTEMPTS",
        "debug_seed": "LEVEL_DEBUG_SEED",
    }

    def __post_init__(self):
        if self.width < 3 or self.height < 3:
            raise ValueError("level must be at least 3x3")
        if self.iterations < 0:
            raise ValueError("iterations must be non-negative")
        if self.spawner_chance < 1:
            raise ValueError("spawner_chance must be >= 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "LevelConfig":
        """Build a config from a Flask ``app.config`` style mapping."""
        kwargs = {}
        for f in fields(cls):
            key = cls._KEYS.get(f.name)
            if key and key in cfg and cfg[key] is not None:
                kwargs[f.name] = _coerce(f.name, cfg[key])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> "LevelConfig":
        environ = os.environ if environ is None else environ
        return cls.from_mapping(
            {key: environ["CAVERN_" + key] for key in cls._KEYS.values() if "CAVERN_" + key in environ}
        )


def _coerce(name: str, value: Any):
    if name == "debug_seed":
        if isinstance(value, str):
            return value.lower() not in {"0", "false", "no", ""}
        return bool(value)
    return int(value)


__all__ = ["LevelConfig"]
