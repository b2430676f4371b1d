import pytest
import pytest_asyncio
import httpx

from brainly.app import create_app
from brainly.core.config import Settings

TEST_SECRET = "test-secret"


class DummyRedis:
    """Подменяет redis.Redis: хранит значения в словаре, TTL игнорирует."""

    def __init__(self, *args, **kwargs):
        self.store = {}

    def setex(self, key, ttl, value):
        self.store[key] = str(value)
        return True

    def get(self, key):
        return self.store.get(key)

    def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0


@pytest.fixture
def settings():
    # отдельная in-memory база на каждый тест
    return Settings(database_url="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def async_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup(async_client):
    """Регистрирует пользователя и возвращает его токен."""

    async def _signup(username="alice", password="pw", name=None, email=None):
        response = await async_client.post(
            "/api/v1/signup",
            json={
                "username": username,
                "name": name or username.title(),
                "email": email or f"{username}@x.com",
                "password": password,
            },
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _signup


@pytest.fixture
def dummy_redis():
    return DummyRedis()


@pytest.fixture
def cached_app(settings, dummy_redis):
    return create_app(settings, redis_client=dummy_redis)


@pytest_asyncio.fixture
async def cached_client(cached_app):
    transport = httpx.ASGITransport(app=cached_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
