from typing import Dict

import fakeredis
import pytest
from fastapi.testclient import TestClient

from healthrec.core.config import Settings
from healthrec.main import create_app
from healthrec.repositories.store import RecordStore
from healthrec.services.passwords import PasswordHasher
from healthrec.services.tokens import TokenService

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, bcrypt_rounds=4, require_https=False)


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def store(redis_client) -> RecordStore:
    return RecordStore(redis_client)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def client(settings, redis_client):
    with TestClient(create_app(settings, client=redis_client)) as test_client:
        yield test_client


def register(client: TestClient, email: str = "ana@example.com", password: str = "s3cret-pass", full_name: str = "Ana Lopez"):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "full_name": full_name},
    )


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    resp = register(client)
    assert resp.status_code == 201, resp.text
    return bearer(resp.json()["token"])
