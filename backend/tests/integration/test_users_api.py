"""User registration and credential updates over HTTP."""

from __future__ import annotations

from tests.factories.user import UserFactory
from tests.helpers.utils import bearer, login, register


def test_register_returns_public_profile(client, session):
    body = register(client, "Jesse@Example.com", "yo")
    assert body["email"] == "jesse@example.com"
    assert body["is_chirpy_red"] is False


def test_register_duplicate_email(client, session):
    UserFactory(email="dup@example.com")
    resp = client.post("/api/users", json={"email": "dup@example.com", "password": "x"})
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_register_requires_password(client, session):
    resp = client.post("/api/users", json={"email": "nopass@example.com"})
    assert resp.status_code == 422


def test_update_credentials(client, session):
    user = UserFactory(email="before@example.com")
    tokens = login(client, user.email)

    resp = client.put(
        "/api/users",
        json={"email": "after@example.com", "password": "n3w-pass"},
        headers=bearer(tokens["token"]),
    )

    assert resp.status_code == 200
    assert resp.get_json()["email"] == "after@example.com"
    assert login(client, "after@example.com", "n3w-pass")["id"] == str(user.id)
    assert client.post(
        "/api/login", json={"email": "before@example.com", "password": "n3w-pass"}
    ).status_code == 401


def test_update_credentials_requires_auth(client, session):
    resp = client.put("/api/users", json={"email": "x@example.com", "password": "x"})
    assert resp.status_code == 401


def test_update_to_someone_elses_email(client, session):
    UserFactory(email="taken@example.com")
    user = UserFactory()
    tokens = login(client, user.email)

    resp = client.put(
        "/api/users",
        json={"email": "taken@example.com", "password": "x"},
        headers=bearer(tokens["token"]),
    )
    assert resp.status_code == 409
