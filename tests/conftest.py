"""
Shared fixtures.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from onestay.api.app import create_app
from onestay.auth.tokens import TokenService
from onestay.config import Settings
from onestay.services import Services
from onestay.storage import InMemoryMetadataStorage, ensure_indexes

TEST_SECRET = "test-secret-key"
SUPERADMIN_EMAIL = "root@example.com"
SUPERADMIN_PASSWORD = "root-password"


# =============================================================================
# Settings & Tokens
# =============================================================================


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key=TEST_SECRET,
        storage_backend="memory",
        auth_role_source="token",
        superadmin_email=SUPERADMIN_EMAIL,
        superadmin_password=SUPERADMIN_PASSWORD,
        sentry_dsn="",
        cors_origins="http://localhost:3000",
    )


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


# =============================================================================
# Storage & Services
# =============================================================================


@pytest_asyncio.fixture
async def storage():
    """Fresh in-memory storage with the production indexes."""
    store = InMemoryMetadataStorage()
    await ensure_indexes(store)
    return store


@pytest_asyncio.fixture
async def services(storage, settings):
    """Services over fresh storage, built-in roles seeded."""
    built = Services.build(storage, settings)
    await built.roles.seed_builtin()
    return built


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def client(settings):
    """Test client with the app lifespan running (roles + super-admin seeded)."""
    with TestClient(create_app(settings, storage=InMemoryMetadataStorage())) as test_client:
        yield test_client


def login(client, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def superadmin_headers(client):
    return auth_headers(login(client, SUPERADMIN_EMAIL, SUPERADMIN_PASSWORD))
