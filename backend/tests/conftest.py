import logging
import os
import sys
import pytest

# Ensure the backend root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arena import create_app, socketio
from arena.controller import SessionController


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    GAME_ID_LENGTH = 8
    MAX_NAME_LENGTH = 32
    LOG_LEVEL = 'DEBUG'


class RecordingNotifier:
    """Collects outbound events instead of sending them."""

    def __init__(self):
        self.sent = []
        self.broadcasts = []

    def send(self, connection_id, event, payload=None):
        self.sent.append((connection_id, event, payload))

    def broadcast(self, event, payload=None):
        self.broadcasts.append((event, payload))

    def to(self, connection_id, event=None):
        return [
            payload for sid, name, payload in self.sent
            if sid == connection_id and (event is None or name == event)
        ]

    def events_to(self, connection_id):
        return [name for sid, name, _ in self.sent if sid == connection_id]

    def clear(self):
        self.sent.clear()
        self.broadcasts.clear()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def controller(notifier):
    return SessionController(notifier, logger=logging.getLogger('arena.tests'))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/'
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass
