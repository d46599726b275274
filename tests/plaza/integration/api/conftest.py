"""Pytest fixtures for API integration tests.

Each test gets its own SQLite file. The engine uses NullPool because the
TestClient runs the app in its own event loop, and seeding helpers run
in a fresh loop of their own.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import update
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from plaza.infrastructure.persistence.sqlalchemy.models import UserModel
from plaza.presentation.api.app import create_app
from plaza_config.settings import Settings
from tests.shared.fixtures.api_client import bearer, login, signup
from tests.shared.fixtures.database import sqlite_url

OTHER_EMAIL = "lee@example.com"


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with cheap bcrypt and a short lockout threshold."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        database_url_override=sqlite_url(tmp_path),
        api_debug=True,
        bcrypt_rounds=4,
        login_max_failed_attempts=3,
        login_lockout_minutes=15,
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client; the lifespan creates the schema."""
    engine = create_async_engine(api_settings.database_url, poolclass=NullPool)
    app = create_app(api_settings, engine)
    with TestClient(app) as client:
        yield client


def _run(coro_factory, url: str):
    """Run a coroutine against the test database in a fresh event loop."""

    async def _wrapper():
        engine = create_async_engine(url, poolclass=NullPool)
        try:
            async with engine.begin() as conn:
                await coro_factory(conn)
        finally:
            await engine.dispose()

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_wrapper())
    finally:
        loop.close()


@pytest.fixture
def user_tokens(test_client) -> dict:
    """Sign up and log in the default user; returns the login body."""
    assert signup(test_client).status_code == 201
    response = login(test_client)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(user_tokens) -> dict[str, str]:
    return bearer(user_tokens["accessToken"])


@pytest.fixture
def other_headers(test_client) -> dict[str, str]:
    """A second, independent user."""
    assert signup(test_client, email=OTHER_EMAIL, name="Lee").status_code == 201
    response = login(test_client, email=OTHER_EMAIL)
    return bearer(response.json()["accessToken"])


@pytest.fixture
def admin_headers(test_client, api_settings) -> dict[str, str]:
    """An administrator, promoted directly in the database."""
    email = "admin@example.com"
    assert signup(test_client, email=email, name="Admin").status_code == 201

    async def _promote(conn):
        await conn.execute(
            update(UserModel).where(UserModel.email == email).values(role="ADMIN"),
        )

    _run(_promote, api_settings.database_url)
    response = login(test_client, email=email)
    return bearer(response.json()["accessToken"])
