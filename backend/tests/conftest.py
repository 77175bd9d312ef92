import os
import sys
import pytest

# Ensure the backend root (containing the `trivia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from trivia import create_app, db, bcrypt
from trivia.services import AccountService, QuestionCatalog, ScoreLedger, load_seed


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    RESET_DATABASE = False
    HIGHSCORE_LIMIT = 10
    HIGHSCORE_POLICY = 'overwrite'
    CORS_ORIGINS = ['*']
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import trivia.models  # noqa: F401
        db.create_all()
    # Yield outside the context: each test-client request must push its own,
    # otherwise Flask-Login caches the first request's user on `g`
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    """App context for tests that drive the services directly."""
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def accounts(app_ctx):
    return AccountService(db.session, bcrypt)


@pytest.fixture()
def ledger(app_ctx):
    return ScoreLedger(db.session)


@pytest.fixture()
def catalog(app_ctx):
    return QuestionCatalog(db.session)


@pytest.fixture()
def seed():
    return load_seed()


@pytest.fixture()
def signup(client):
    """Create an account over HTTP and return its JSON payload."""
    def _signup(name='alice', password='secret'):
        res = client.post('/users', json={'name': name, 'password': password})
        assert res.status_code == 200
        return res.get_json()
    return _signup
