"""
Pytest fixtures for the issue tracker API.

Every test gets its own app instance over a fresh SQLite file, driven
through FastAPI's TestClient.
"""

import os
from collections.abc import Callable, Iterator

# Must be set before the app modules read their configuration
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from main import create_app  # noqa: E402

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def client(tmp_path) -> Iterator[TestClient]:
    app = create_app(f"sqlite+aiosqlite:///{tmp_path / 'issues.db'}")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client) -> Callable[..., tuple[dict, dict]]:
    """Register a user and return ``(auth headers, user payload)``."""

    def _register(email: str = "alice@example.com", password: str = DEFAULT_PASSWORD, name: str | None = "Alice"):
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()["data"]
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register


@pytest.fixture
def alice(register) -> dict:
    headers, _ = register("alice@example.com", name="Alice")
    return headers


@pytest.fixture
def bob(register) -> dict:
    headers, _ = register("bob@example.com", name="Bob")
    return headers


@pytest.fixture
def create_issue(client) -> Callable[..., dict]:
    """Create an issue through the API and return its payload."""

    def _create(headers: dict, title: str = "Login broken", description: str = "Cannot log in with valid credentials", **fields):
        resp = client.post(
            "/api/issues",
            json={"title": title, "description": description, **fields},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["issue"]

    return _create
