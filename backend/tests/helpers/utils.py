"""Tiny helpers shared across test modules."""

from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header carrying ``token``."""
    return {"Authorization": f"Bearer {token}"}


def api_key(key: str) -> dict[str, str]:
    return {"Authorization": f"ApiKey {key}"}


def register(client, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Create a user through the API and return the JSON body."""
    resp = client.post("/api/users", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def login(client, email: str, password: str = DEFAULT_PASSWORD, **extra) -> dict:
    """Log in through the API and return the JSON body (user plus tokens)."""
    resp = client.post("/api/login", json={"email": email, "password": password, **extra})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()
