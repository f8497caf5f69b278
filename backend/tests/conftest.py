"""
Pytest configuration and fixtures.

Every test gets its own SQLite file under tmp_path, so tests never share
accounts (the first registration in each test is the administrator).
"""

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from db.database import Database
from main import create_app

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "user@example.com"
PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'sweetshop_test.db'}",
        seed_on_startup=False,
        jwt_secret="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def register(client, email, password=PASSWORD):
    resp = client.post("/api/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(register(client, ADMIN_EMAIL)["token"])


@pytest.fixture
def user_headers(client, admin_headers):
    return bearer(register(client, USER_EMAIL)["token"])


@pytest.fixture
def make_sweet(client, admin_headers):
    def _make(name="Chocolate Bar", category="Chocolate", price=2.99, quantity=10):
        resp = client.post(
            "/api/sweets",
            json={"name": name, "category": category, "price": price, "quantity": quantity},
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["sweet"]

    return _make


@pytest.fixture
async def db(settings):
    database = Database(settings.database_url)
    await database.create_all()
    try:
        yield database
    finally:
        await database.dispose()
