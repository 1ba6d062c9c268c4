import os
import pytest

from highscores import create_app, db, socketio
from highscores.services.scores.integrity import compute_digest

SHARED_SECRET = 'test-shared-secret'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SCORE_SECRET_KEY = SHARED_SECRET
    DIGEST_ALGORITHM = 'sha1'
    DIGEST_COMPARISON = 'literal'
    SCORE_TIMEZONE = 'UTC'
    COLLAPSE_DUPLICATE_SUBMISSIONS = False
    CORS_ORIGINS = r'/.*\.itch\.io$/,/.*\.itch\.zone$/'
    SOCKETIO_CORS_ORIGINS = '*'
    AUTO_CREATE_TABLES = True
    LOG_PAYLOADS = False


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def services(flask_app):
    return flask_app.extensions['highscores']


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


def signed(initials='ABC', score=500, uniqueid='u42', timestamp='15/06/2024 10:30:00', secret=SHARED_SECRET):
    """Build a submission body the way the game client does."""
    return {
        'initials': initials,
        'score': score,
        'uniqueid': uniqueid,
        'timestamp': timestamp,
        'hash': compute_digest(initials, score, uniqueid, timestamp, secret),
    }
