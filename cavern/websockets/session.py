"""Socket.IO handlers for live level sessions.

Events:
    - join_level: Join the room of a level session; payload { seed }
    - leave_level: Leave it again; payload { seed }
    - level_tick: One game-loop tick of the spawner gate; payload { seed, chance? }
    - request_path: Shortest path query; payload { seed, start: [x, y], target: [x, y] }

Emits:
    - level_state: Full session layout to the joining client
    - spawner_created: To the whole room when a tick placed a spawner
    - path_result: { path, cost } to the requesting client (nulls when unreachable)
    - error: { message, field, code } for invalid payloads
"""

from flask import request
from flask_socketio import emit, join_room, leave_room

from cavern import socketio
from cavern.level import LevelGenerationError, coerce_seed
from cavern.logging_utils import get_logger
from cavern.routes.level_api import _session_cache_lock, get_cached_session

from .validation import JOIN_LEVEL, LEAVE_LEVEL, LEVEL_TICK, REQUEST_PATH, validate

_log = get_logger("ws_session")

# Structure: { room_name: { 'members': set([sid,...]) } }
active_levels = {}
# Structure: { sid: { requested_seed: room_name } }; a rerolled join lands in
# the room of the seed actually used, so leave_level looks the room up here
joined_rooms = {}


def room_for(seed: bytes) -> str:
    return f"level:{seed.hex()}"


def _emit_invalid(event: str, result: dict):
    emit("error", {"message": f"Invalid {event}: {result['error']}", "field": result["field"], "code": result["code"]})


def _drop_member(room: str, sid: str) -> int:
    """Remove ``sid`` from ``room`` and forget the room once empty; return members left."""
    info = active_levels.get(room)
    if not info:
        return 0
    info["members"].discard(sid)
    if not info["members"]:
        active_levels.pop(room, None)
    return len(info["members"])


def _session_for(event: str, seed_text: str):
    """Resolve a session or emit an error event and return None."""
    try:
        seed = coerce_seed(seed_text)
    except ValueError as exc:
        emit("error", {"message": f"Invalid {event}: {exc}", "field": "seed", "code": "seed"})
        return None
    try:
        return get_cached_session(seed)
    except LevelGenerationError as exc:
        _log.error(event="level_generation_failed", attempts=exc.attempts, source=event)
        emit("error", {"message": "level generation failed", "field": "seed", "code": "generation"})
        return None


@socketio.on("join_level")
def handle_join_level(data):
    ok, result = validate(data or {}, JOIN_LEVEL)
    if not ok:
        _emit_invalid("join_level", result)
        return
    session = _session_for("join_level", result["seed"])
    if session is None:
        return
    room = room_for(session.seed)
    join_room(room)
    info = active_levels.setdefault(room, {"members": set()})
    info["members"].add(request.sid)
    joined_rooms.setdefault(request.sid, {})[coerce_seed(result["seed"])] = room
    with _session_cache_lock:
        state = session.to_dict()
    emit("level_state", state)
    _log.info(event="join_level", room=room[:22], members=len(info["members"]))


@socketio.on("leave_level")
def handle_leave_level(data):
    ok, result = validate(data or {}, LEAVE_LEVEL)
    if not ok:
        _emit_invalid("leave_level", result)
        return
    try:
        seed = coerce_seed(result["seed"])
    except ValueError as exc:
        emit("error", {"message": f"Invalid leave_level: {exc}", "field": "seed", "code": "seed"})
        return
    rooms = joined_rooms.get(request.sid, {})
    room = rooms.pop(seed, None) or room_for(seed)
    if not rooms:
        joined_rooms.pop(request.sid, None)
    leave_room(room)
    remaining = _drop_member(room, request.sid)
    _log.info(event="leave_level", room=room[:22], remaining=remaining)


@socketio.on("disconnect")
def handle_disconnect(reason=None):
    sid = request.sid
    joined_rooms.pop(sid, None)
    # Flask-SocketIO drops the sid from its own rooms; prune our membership map
    for room in [r for r, info in active_levels.items() if sid in info["members"]]:
        _drop_member(room, sid)


@socketio.on("level_tick")
def handle_level_tick(data):
    ok, result = validate(data or {}, LEVEL_TICK)
    if not ok:
        _emit_invalid("level_tick", result)
        return None
    session = _session_for("level_tick", result["seed"])
    if session is None:
        return None
    with _session_cache_lock:
        pos = session.level.maybe_create_spawner(result.get("chance"))
        spawners = [list(s) for s in session.spawners]
    if pos is None:
        return {"spawner": None}
    emit("spawner_created", {"spawner": list(pos), "spawners": spawners}, to=room_for(session.seed))
    return {"spawner": list(pos)}


@socketio.on("request_path")
def handle_request_path(data):
    ok, result = validate(data or {}, REQUEST_PATH)
    if not ok:
        _emit_invalid("request_path", result)
        return
    session = _session_for("request_path", result["seed"])
    if session is None:
        return
    with _session_cache_lock:
        found = session.level.pathfind(result["start"], result["target"])
    if found is None:
        emit("path_result", {"path": None, "cost": None})
        return
    path, cost = found
    emit("path_result", {"path": [list(c) for c in path], "cost": cost})
