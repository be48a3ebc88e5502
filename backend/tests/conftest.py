import os
import sys
import random
import pytest

# Ensure the backend root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arena import create_app, socketio
from arena.game import Game


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    HOST = '127.0.0.1'
    PORT = 3000
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    INITIAL_COLLECTIBLES = 1
    LOG_LEVEL = 'DEBUG'
    POWERED_BY = 'PHP 7.4.3'


class RecordingSocketIO:
    """Stands in for the SocketIO server and records every emit."""

    def __init__(self):
        self.emitted = []

    def emit(self, event, payload, to=None, skip_sid=None, namespace=None):
        self.emitted.append({
            'event': event,
            'payload': payload,
            'to': to,
            'skip_sid': skip_sid,
            'namespace': namespace,
        })

    def events(self, name):
        return [e for e in self.emitted if e['event'] == name]


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig, rng=random.Random(1234))
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; disconnects leftovers on teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


@pytest.fixture()
def recorder():
    return RecordingSocketIO()


@pytest.fixture()
def game(recorder):
    g = Game(recorder, rng=random.Random(42))
    g.start(1)
    return g
