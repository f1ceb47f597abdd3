"""
Shared fixtures.

The API runs against an in-memory mongomock database. The TestClient is
used WITHOUT a `with` block so the app lifespan (which would connect to a
real MongoDB) never runs - the stores are injected directly instead.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from energisense.config import Config
from energisense.main import app
from energisense.models import Role
from energisense.routers import set_services
from energisense.services import AccountStore, AuthService, ReadingStore

TEST_SECRET = "test-secret-do-not-use"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password123"
USER_EMAIL = "operator@example.com"
USER_PASSWORD = "operator-pass"


@pytest.fixture
def db():
    """A fresh in-memory database per test."""
    return mongomock.MongoClient()["energisense_test"]


@pytest.fixture
def reading_store(db):
    store = ReadingStore(db)
    store.ensure_indexes()
    return store


@pytest.fixture
def account_store(db):
    store = AccountStore(db)
    store.ensure_indexes()
    return store


@pytest.fixture
def auth_service(account_store):
    # Lowest bcrypt cost keeps the suite fast
    return AuthService(account_store, secret=TEST_SECRET, expires_hours=5, bcrypt_rounds=4)


@pytest.fixture
def client(reading_store, account_store, auth_service, monkeypatch):
    """TestClient wired to the in-memory stores, closed registration."""
    monkeypatch.setattr(Config, "OPEN_REGISTRATION", False)
    monkeypatch.setattr(Config, "LATEST_WINDOW", 50)
    set_services(reading_store, account_store, auth_service)
    yield TestClient(app)
    set_services(None, None, None)


@pytest.fixture
def admin_account(auth_service):
    return auth_service.register(ADMIN_EMAIL, ADMIN_PASSWORD, Role.ADMIN)


@pytest.fixture
def user_account(auth_service):
    return auth_service.register(USER_EMAIL, USER_PASSWORD, Role.USER)


@pytest.fixture
def admin_headers(client, admin_account):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def user_headers(client, user_account):
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
