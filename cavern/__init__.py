"""Flask application and Socket.IO setup for the cavern level server.

Configuration is sourced from environment variables (and a ``.env`` file when
present) with defaults suited to development. The ``instance/`` directory holds
runtime files such as the rotating application log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO

from cavern.config import load_app_config

# Load .env if present so CAVERN_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still serve requests; only file logging is lost
    pass

app.config.update(load_app_config())

# Let Flask-SocketIO select best async_mode based on installed deps (eventlet/gevent/threading)
socketio = SocketIO(
    app,
    async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
    cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    engineio_logger=bool(os.getenv("ENGINEIO_LOGGER", "0") == "1"),
    ping_interval=20,
    ping_timeout=10,
)

# Register HTTP blueprints after app/socketio exist
from cavern.routes.level_api import bp_level  # noqa: E402

app.register_blueprint(bp_level)

# Import websocket handlers so their event decorators register with Socket.IO (side-effect)
from cavern.websockets import session as _ws_session  # noqa: F401,E402


def create_app(overrides=None):
    """Return the Flask app instance, applying optional config overrides."""
    if overrides:
        app.config.update(overrides)
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
