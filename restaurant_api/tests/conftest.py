"""Shared fixtures: an app wired to a fresh in-memory store per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from restaurant_api.app import create_app
from restaurant_api.config import Settings
from restaurant_api.store.memory import MemoryDatabase

SECRET = "test-signing-secret-that-is-long-enough-for-hs256"

EMAIL = "diner@example.com"
PASSWORD = "s3cret-pass"


@pytest.fixture
def settings() -> Settings:
    # Lowest bcrypt cost keeps the suite fast.
    return Settings(jwt_secret=SECRET, bcrypt_rounds=4)


@pytest.fixture
def database() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _signup(c: TestClient, email: str = EMAIL, password: str = PASSWORD):
    return c.post("/signup", json={"email": email, "password": password})


def _login(c: TestClient, email: str = EMAIL, password: str = PASSWORD):
    return c.post("/login", json={"email": email, "password": password})


@pytest.fixture
def token(client) -> str:
    _signup(client)
    return _login(client).json()["token"]


@pytest.fixture
def auth_headers(token) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
