import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Keep event lines out of captured output unless a test asks for them
os.environ.setdefault("CAVERN_LOG_LEVEL", "warn")

from cavern import create_app  # noqa: E402
from cavern.routes.level_api import clear_session_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_level_sessions():
    """Live sessions are mutated by spawner/enemy calls; never share them across tests."""
    clear_session_cache()
    yield
    clear_session_cache()
