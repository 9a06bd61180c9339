import os

# Settings are read at import time.
os.environ.setdefault("APP_MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("APP_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_IMAGEKIT_PRIVATE_KEY", "private_test_key")
os.environ.setdefault("APP_IMAGEKIT_PUBLIC_KEY", "public_test_key")
os.environ.setdefault("APP_IMAGEKIT_URL_ENDPOINT", "https://ik.imagekit.io/vidshare")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from vidshare.core.database import ConnectionCache, get_connection_cache, prepare_collections  # noqa: E402
from vidshare.main import create_app  # noqa: E402


@pytest.fixture
def mock_db():
    return AsyncMongoMockClient()["vidshare_test"]


@pytest.fixture
def cache(mock_db):
    async def connect():
        await prepare_collections(mock_db)
        return mock_db

    return ConnectionCache(connect)


@pytest.fixture
def app(cache):
    application = create_app()
    application.dependency_overrides[get_connection_cache] = lambda: cache
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client):
    credentials = {"email": "viewer@example.com", "password": "s3cret-pass"}
    assert client.post("/api/auth/register", json=credentials).status_code == 201
    response = client.post("/api/auth/callback/credentials", json=credentials)
    assert response.status_code == 200
    return client
