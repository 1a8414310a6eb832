import os

# Settings are read at import time, so the environment has to be in place
# before anything from app is imported.
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-that-is-long-enough-for-hs256")
os.environ.setdefault("CSRF_SECRET", "test-csrf-secret")
os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ.setdefault("COOKIE_DOMAIN", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.dependencies import get_settings, get_task_repository, get_user_repository
from app.main import app
from app.services.auth import AuthService
from tests.fakes import TEST_EMAIL, TEST_PASSWORD, FakeTaskRepository, FakeUserRepository


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def task_repo():
    return FakeTaskRepository()


@pytest.fixture
def test_settings():
    return settings


@pytest_asyncio.fixture
async def registered_user(user_repo, test_settings):
    return await AuthService(user_repo, test_settings).register(TEST_EMAIL, TEST_PASSWORD)


@pytest_asyncio.fixture
async def client(user_repo, task_repo, test_settings):
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_task_repository] = lambda: task_repo
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def logged_in_client(client, registered_user):
    response = await client.post(
        "/api/v1/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return client
