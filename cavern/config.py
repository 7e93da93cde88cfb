"""Application configuration sourced from ``CAVERN_*`` environment variables.

Values land in Flask's ``app.config``; the level layer reads them back through
``LevelConfig.from_mapping(app.config)`` so tests can override a single key
with ``app.config.update(...)``.
"""

import os
from typing import Any, Dict, Mapping

DEFAULTS: Dict[str, Any] = {
    "LEVEL_WIDTH": 50,
    "LEVEL_HEIGHT": 50,
    "LEVEL_ITERATIONS": 5,
    "BEACON_THRESHOLD": 30,
    "PLAYER_RADIUS": 10,
    "LEVEL_DEBUG_SEED": False,
    "SPAWNER_CHANCE": 100,
    "LEVEL_MAX_ATTEMPTS": 10,
    "LEVEL_CACHE_MAX": 8,
}

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


def load_app_config(environ: Mapping[str, str] = None) -> Dict[str, Any]:
    """Return the ``app.config`` entries for this process.

    Unparseable integers raise ``ValueError`` naming the offending variable.
    """
    environ = os.environ if environ is None else environ
    cfg: Dict[str, Any] = {
        "SECRET_KEY": environ.get("SECRET_KEY", "dev-secret-change-me"),
    }
    for key, default in DEFAULTS.items():
        raw = environ.get("CAVERN_" + key)
        if raw is None or raw.strip() == "":
            cfg[key] = default
        elif isinstance(default, bool):
            cfg[key] = _env_bool(raw)
        else:
            try:
                cfg[key] = int(raw)
            except ValueError:
                raise ValueError(f"CAVERN_{key} must be an integer, got {raw!r}") from None
    return cfg


__all__ = ["DEFAULTS", "load_app_config"]
