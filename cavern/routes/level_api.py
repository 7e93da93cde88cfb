"""Level session HTTP API.

Endpoints:
    POST /api/level/seed      normalise or generate a seed
    GET  /api/level           build (or fetch) a session and return its layout
    POST /api/level/path      shortest path between two cells
    POST /api/level/spawner   convert a floor-facing wall into an enemy spawner
    POST /api/level/enemy     plan an enemy route from a random floor to the beacon

Sessions are keyed by seed and level dimensions. A request whose seed had to
be rerolled is answered with the seed that was actually used; follow-up
requests should send that seed back.
"""

import os
import threading

from flask import Blueprint, current_app, jsonify, request

from cavern.level import (
    Coord,
    LevelConfig,
    LevelGenerationError,
    Session,
    build_session,
    coerce_seed,
    create_seed,
)
from cavern.logging_utils import get_logger
from cavern.utils.coords import encode_path

_log = get_logger("level_api")

# Simple in-process cache key->Session. Thread-safe with a lock because Flask-SocketIO/eventlet may interleave greenlets.
_session_cache = {}
_session_cache_lock = threading.Lock()


class BadRequest(Exception):
    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


def level_config() -> LevelConfig:
    return LevelConfig.from_mapping(current_app.config)


def _cache_key(seed: bytes, config: LevelConfig):
    return (seed, config.width, config.height, config.iterations, config.beacon_threshold, config.player_radius)


def get_cached_session(seed: bytes, config: LevelConfig = None) -> Session:
    """Return the live session for ``seed``, building it on first use."""
    config = config or level_config()
    if os.environ.get("CAVERN_DISABLE_CACHE") == "1":
        return build_session(seed, config)
    key = _cache_key(seed, config)
    with _session_cache_lock:
        session = _session_cache.get(key)
        if session is not None:
            return session
    session = build_session(seed, config)
    cache_max = max(int(current_app.config.get("LEVEL_CACHE_MAX", 8)), 2)
    with _session_cache_lock:
        # Another handler may have finished the same build first
        existing = _session_cache.get(key)
        if existing is not None:
            return existing
        _session_cache[key] = session
        _session_cache.setdefault(_cache_key(session.seed, config), session)
        while len(_session_cache) > cache_max:
            _session_cache.pop(next(iter(_session_cache)))
    return session


def clear_session_cache():
    with _session_cache_lock:
        _session_cache.clear()


def parse_seed(value, field: str = "seed", required: bool = True) -> bytes:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise BadRequest("seed is required", field)
        return None
    if not isinstance(value, (str, int)):
        raise BadRequest("seed must be a string or integer", field)
    try:
        return coerce_seed(value)
    except ValueError as exc:
        raise BadRequest(str(exc), field) from None


def parse_coord(value, field: str, config: LevelConfig) -> Coord:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise BadRequest(f"{field} must be a [x, y] pair of integers", field)
    x, y = value
    if not (0 <= x < config.width and 0 <= y < config.height):
        raise BadRequest(f"{field} is outside the level", field)
    return Coord(x, y)


def route_to_dict(route):
    if route is None:
        return None
    return {
        "spawn": list(route.spawn),
        "waypoints": [list(c) for c in route.waypoints],
        "cost": route.cost,
    }


bp_level = Blueprint("level", __name__)


@bp_level.errorhandler(BadRequest)
def _bad_request(exc: BadRequest):
    return jsonify({"error": exc.message, "field": exc.field}), 400


@bp_level.errorhandler(LevelGenerationError)
def _generation_failed(exc: LevelGenerationError):
    _log.error(event="level_generation_failed", attempts=exc.attempts, reason=str(exc.last_error))
    return jsonify({"error": "level generation failed", "attempts": exc.attempts}), 503


@bp_level.route("/api/level/seed", methods=["POST"])
def new_seed():
    """Normalise a seed or generate a fresh one.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool>, "debug": <bool> }
    Response: { "seed": <64 hex chars> }
    """
    data = request.get_json(silent=True) or {}
    provided = data.get("seed")
    if data.get("regenerate") or provided is None:
        seed = create_seed(bool(data.get("debug")))
    else:
        seed = parse_seed(provided)
    return jsonify({"seed": seed.hex()})


@bp_level.route("/api/level")
def get_level():
    """Build or fetch the session for ``?seed=`` and return its layout.

    Without a seed a fresh one is generated (the debug seed with ``debug=1``).
    """
    config = level_config()
    debug = request.args.get("debug", "0").lower() in ("1", "true", "yes")
    seed = parse_seed(request.args.get("seed"), required=False)
    if seed is None:
        seed = create_seed(debug or config.debug_seed)
    session = get_cached_session(seed, config)
    with _session_cache_lock:
        payload = session.to_dict()
        payload["enemies"] = len(session.enemies)
    _log.info(event="level_served", seed=payload["seed"][:16], attempts=session.attempts)
    return jsonify(payload)


@bp_level.route("/api/level/path", methods=["POST"])
def find_path():
    data = request.get_json(silent=True) or {}
    config = level_config()
    seed = parse_seed(data.get("seed"))
    start = parse_coord(data.get("start"), "start", config)
    target = parse_coord(data.get("target"), "target", config)
    session = get_cached_session(seed, config)
    with _session_cache_lock:
        found = session.level.pathfind(start, target)
    if found is None:
        return jsonify({"path": None, "cost": None})
    path, cost = found
    if data.get("compact"):
        return jsonify({"path": encode_path(path), "cost": cost})
    return jsonify({"path": [list(c) for c in path], "cost": cost})


@bp_level.route("/api/level/spawner", methods=["POST"])
def place_spawner():
    data = request.get_json(silent=True) or {}
    seed = parse_seed(data.get("seed"))
    session = get_cached_session(seed)
    with _session_cache_lock:
        pos = session.level.create_spawner()
        spawners = [list(s) for s in session.spawners]
    _log.info(event="spawner_placed", seed=session.seed.hex()[:16], spawner=pos and f"{pos.x},{pos.y}")
    return jsonify({"spawner": list(pos) if pos is not None else None, "spawners": spawners})


@bp_level.route("/api/level/enemy", methods=["POST"])
def spawn_enemy():
    data = request.get_json(silent=True) or {}
    seed = parse_seed(data.get("seed"))
    session = get_cached_session(seed)
    with _session_cache_lock:
        route = session.spawn_enemy()
    return jsonify({"enemy": route_to_dict(route)})
