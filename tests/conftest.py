import os
import sys
import pytest

# Ensure the project root (containing the `cryptic_hunt` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cryptic_hunt import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Cheap hashes keep the suite fast
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    USERNAME_MIN_LENGTH = 3
    USERNAME_MAX_LENGTH = 24
    PASSWORD_MIN_LENGTH = 6
    LEADERBOARD_LIMIT = 100
    LEVELS_FILE = None
    FORCE_HTTPS = False
    SESSION_COOKIE_SECURE = False


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    # Tables live on the app's in-memory engine; no context is held open
    # between requests so each request loads its own logged-in user
    with application.app_context():
        import cryptic_hunt.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_factory():
    """Build extra apps whose config overrides TestConfig."""
    built = []

    def _make(**overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        application = create_app(config_class)
        with application.app_context():
            db.create_all()
        built.append(application)
        return application

    yield _make
    for application in built:
        with application.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(flask_app, namespace='/ws')
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
