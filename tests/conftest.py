import os

# Must be set before the application settings are imported.
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-event-api-suite-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

from event_api.app.core.config import settings
from event_api.app.core.db import init_db
from event_api.app.main import create_app

API = "/api/v1"


@pytest.fixture()
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file and migrate it."""
    path = tmp_path / "test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture()
def client(db_path) -> Generator[TestClient, None, None]:
    """In-process TestClient; entering it runs the app's startup."""
    with TestClient(create_app()) as test_client:
        yield test_client


def register(client: TestClient, email: str, password: str = "password1", name: str = "Ann"):
    return client.post(f"{API}/register", json={"email": email, "password": password, "name": name})


def login(client: TestClient, email: str, password: str = "password1"):
    return client.post(f"{API}/login", json={"email": email, "password": password})


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(client):
    """Register and log in a user; returns ``(user_json, headers)``."""

    def _make(email: str, name: str = "Ann"):
        resp = register(client, email, name=name)
        assert resp.status_code == 201, resp.text
        token = login(client, email).json()["token"]
        return resp.json(), auth_headers(token)

    return _make


EVENT_BODY = {
    "name": "Go meetup",
    "description": "Monthly meetup for Go developers",
    "date": "2025-09-01",
    "location": "Hanoi",
}


@pytest.fixture()
def make_event(client):
    """Create an event with the given headers; returns the event JSON."""

    def _make(headers, **overrides):
        body = {**EVENT_BODY, **overrides}
        resp = client.post(f"{API}/events", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
