"""Pytest configuration and fixtures for craftly.

HTTP tests run against craftly.main:app over ASGITransport with the
Firestore dependency replaced by tests.fakes.FakeFirestore. Environment
is set before the app is imported because create_app() reads settings.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-craftly-tests")
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ALLOW_USER_ID_HEADER"] = "true"

import pytest
from httpx import ASGITransport, AsyncClient

from craftly.api.v1.dependencies import get_firestore
from craftly.api.websocket.manager import ConnectionManager
from craftly.client.config import get_client_settings
from craftly.core.config import get_settings
from craftly.infrastructure.cache.memory_cache import MemoryCache
from craftly.infrastructure.security.password import get_password_hash
from craftly.main import app
from tests.fakes import FakeFirestore
from tests.helpers import TEST_PASSWORD, make_user


@pytest.fixture(autouse=True)
def _fresh_app_state():
    """Each test gets an empty cache and WebSocket manager and no overrides."""
    get_settings.cache_clear()
    get_client_settings.cache_clear()
    app.state.cache = MemoryCache()
    app.state.ws_manager = ConnectionManager()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db() -> FakeFirestore:
    """In-memory Firestore wired into the app for this test."""
    fake = FakeFirestore()
    app.dependency_overrides[get_firestore] = lambda: fake
    return fake


@pytest.fixture
async def client(db: FakeFirestore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt hash of TEST_PASSWORD (computed once; hashing is slow)."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def seed_user(db: FakeFirestore, password_hash: str):
    """Factory: store a user document and return it."""

    def _seed(uid: str = "buyer1", email: str = "buyer@gmail.com", **fields) -> dict:
        user = make_user(uid, email, password_hash, **fields)
        db.seed(f"users/{uid}", user)
        return user

    return _seed

