import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'delexi_proxy' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


TEST_SETTINGS = {
    "spotify_client_id": "test-client-id",
    "spotify_client_secret": "test-client-secret",
    "default_market": "FR",
    "allowed_markets": ["FR", "US", "CA", "BR", "GB", "DE", "ES", "IT"],
    "forward_market": True,
    "cors_allowed_origins": ["http://localhost:5173"],
}


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Ensure tests never pick up real credentials from the environment."""
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "test-client-secret")
    yield


@pytest.fixture
def clock():
    return test_stubs.FakeClock()


@pytest.fixture
def upstream():
    """Scripted upstream with a valid token and the sample playlist."""
    return test_stubs.ScriptedSession(
        token=[test_stubs.token_response("T1", 3600)],
        resource=[test_stubs.FakeResponse(200, test_stubs.sample_playlist())],
    )


@pytest.fixture
def app(upstream, clock):
    import app as app_module

    application = app_module.create_app(dict(TEST_SETTINGS), http_session=upstream, clock=clock)
    application.config["TESTING"] = True
    yield application


@pytest.fixture
def client(app):
    return app.test_client()
