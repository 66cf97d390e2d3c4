import os
import sys
import pytest

# Ensure the backend root (containing the `promptparty` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from promptparty.config import Config
from promptparty import create_app, socketio
from promptparty.registry import RoomRegistry


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SOCKETIO_NAMESPACE = '/'
    DERANGEMENT_MAX_ATTEMPTS = 150


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def bare_registry():
    """A registry not bound to any app, for pure state machine tests."""
    return RoomRegistry()


@pytest.fixture()
def sio_factory(flask_app):
    """Create additional Socket.IO test clients; all are disconnected afterwards."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/',
        )
        test_client.get_received('/')  # drop the 'connected' greeting
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except RuntimeError:
            pass


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()
