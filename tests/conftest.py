"""
Test fixtures za core servise i API.

Setup:
- app: jedna Flask aplikacija (TestingConfig, in-memory SQLite)
- storage: parametrizovan, svaki core test se izvrsava nad
  MemoryStorage i nad SqlStorage
- jane, john (gradjani), admin (administrator)
"""
import pytest
from datetime import timedelta

from civichub import create_app
from civichub.config import TestingConfig, DEFAULT_PROFANITY_WORDS
from civichub.extensions import db as _db
from civichub.api.middleware.jwt_utils import create_access_token
from civichub.services import build_services, get_services
from civichub.storage.memory import MemoryStorage
from civichub.storage.sql import SqlStorage
from civichub.storage.records import Location


class CivicTestConfig(TestingConfig):
    """Override za testove - duzi token expiry."""
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'


# Config za servise koji se prave van Flask aplikacije
SERVICE_SETTINGS = {
    'PROFANITY_WORDS': DEFAULT_PROFANITY_WORDS,
    'PROFANITY_MASK_CHAR': '*',
    'WARNING_INCREMENT': 1,
    'BAN_THRESHOLD': 2,
    'DEFAULT_RADIUS_KM': 50,
}

# Centar Bengalurua i tacke u okolini
CENTER = Location(12.9716, 77.5946, 'Main Street, Downtown')
NEARBY = Location(12.9815, 77.6072, 'Park Avenue')        # ~1.7 km
MYSORE = Location(12.2958, 76.6394, 'Mysore')             # ~128 km


@pytest.fixture(scope='session')
def app():
    """Kreira Flask app za testove."""
    app = create_app(CivicTestConfig)
    yield app


@pytest.fixture(scope='function')
def db(app):
    """Kreira cistu bazu za svaki test."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture(params=['memory', 'sql'])
def storage(request):
    """Storage backend - svaki test koji ga koristi ide kroz oba backend-a."""
    if request.param == 'memory':
        return MemoryStorage()
    request.getfixturevalue('db')
    return SqlStorage(_db)


@pytest.fixture
def services(storage):
    """Servisi povezani sa test storage-om."""
    return build_services(storage, SERVICE_SETTINGS)


def _create_user(storage, username, name, is_admin=False):
    # Hash nije bitan za core testove, login se testuje kroz API
    return storage.create_user(
        username=username,
        password_hash='not-a-real-hash',
        name=name,
        email=f'{username}@example.com',
        is_admin=is_admin,
    )


@pytest.fixture
def jane(storage):
    return _create_user(storage, 'janesmith', 'Jane Smith')


@pytest.fixture
def john(storage):
    return _create_user(storage, 'johndoe', 'John Doe')


@pytest.fixture
def admin(storage):
    return _create_user(storage, 'admin', 'Admin User', is_admin=True)


@pytest.fixture
def suggestion(services, jane):
    """Aktivan predlog koji je objavila Jane, u centru grada."""
    return services.suggestions.create_suggestion(
        jane.id, 'Fix pothole on Main Street', 'Large pothole near the bus stop', CENTER
    )


# =============================================================================
# API FIXTURES
# =============================================================================

class AuthClient:
    """Test klijent koji salje Bearer token uz svaki zahtev."""

    def __init__(self, app, user):
        self._client = app.test_client()
        with app.app_context():
            token = create_access_token(user.id, is_admin=user.is_admin)
        self._headers = {'Authorization': f'Bearer {token}'}

    def get(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.get(url, **kw)

    def post(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.post(url, **kw)

    def put(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.put(url, **kw)

    def delete(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.delete(url, **kw)

    def patch(self, url, **kw):
        kw.setdefault('headers', {}).update(self._headers)
        return self._client.patch(url, **kw)


@pytest.fixture
def api_services(app, db):
    """Servisi aplikacije (SqlStorage nad test bazom)."""
    return get_services()


@pytest.fixture
def api_jane(api_services):
    return _create_user(api_services.storage, 'janesmith', 'Jane Smith')


@pytest.fixture
def api_john(api_services):
    return _create_user(api_services.storage, 'johndoe', 'John Doe')


@pytest.fixture
def api_admin(api_services):
    return _create_user(api_services.storage, 'admin', 'Admin User', is_admin=True)


@pytest.fixture
def client(app, db):
    """Anonimni test klijent."""
    return app.test_client()


@pytest.fixture
def client_jane(app, api_jane):
    return AuthClient(app, api_jane)


@pytest.fixture
def client_john(app, api_john):
    return AuthClient(app, api_john)


@pytest.fixture
def client_admin(app, api_admin):
    return AuthClient(app, api_admin)
