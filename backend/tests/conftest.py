import os
import sys
import pytest

# Ensure the backend root (containing the `quizhub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from quizhub import create_app, socketio
from quizhub.notifier import PlayerNotifier
from quizhub.services.games import GameEngine
from quizhub.services.quizzes import QuizStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    DEFAULT_SCORE_LIMIT = 5
    REVEAL_ANSWERS_DURING_QUESTION = True
    SCORE_REPEAT_ANSWERS = True
    QUIZ_SEED_PATH = None


QUIZ_PAYLOAD = {
    'title': 'Capitals',
    'questions': [
        {
            'id': 'q1',
            'text': 'Capital of France?',
            'answers': [
                {'id': 'a1', 'text': 'Paris', 'is_right': True},
                {'id': 'a2', 'text': 'Lyon', 'is_right': False},
            ],
        },
        {
            'id': 'q2',
            'text': 'Capital of Italy?',
            'answers': [
                {'id': 'b1', 'text': 'Rome', 'is_right': True},
                {'id': 'b2', 'text': 'Milan', 'is_right': False},
            ],
        },
    ],
}


class RecordingNotifier(PlayerNotifier):
    def __init__(self):
        self.sent = []

    def send(self, player_id, message):
        self.sent.append((player_id, message))

    def to(self, player_id):
        return [m for pid, m in self.sent if pid == player_id]


@pytest.fixture()
def quiz_store():
    return QuizStore()


@pytest.fixture()
def quiz(quiz_store):
    return quiz_store.create(QUIZ_PAYLOAD)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def engine(quiz_store, notifier):
    return GameEngine(quiz_store, notifier)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def quiz_id(client):
    return client.post('/quizzes', json=QUIZ_PAYLOAD).get_json()['id']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
