"""SQLAlchemy refresh token backend against the transactional test database."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

import pytest

from chirpy.infra.sql import SQLAlchemyRefreshTokenBackend
from chirpy.models import RefreshToken
from chirpy.services._shared.errors import StorageError
from chirpy.services._shared.ports import RefreshTokenRecord
from tests.factories.user import UserFactory

T0 = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture()
def backend() -> SQLAlchemyRefreshTokenBackend:
    return SQLAlchemyRefreshTokenBackend()


def _record(user_id, *, token: str | None = None) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        token=token or secrets.token_hex(32),
        user_id=user_id,
        created_at=T0,
        updated_at=T0,
        expires_at=T0 + timedelta(days=60),
    )


def test_insert_then_get_round_trips_utc(backend, session):
    user = UserFactory()
    record = _record(user.id)

    backend.insert(record)

    assert backend.get(record.token) == record
    assert session.get(RefreshToken, record.token).user_id == user.id


def test_get_unknown_returns_none(backend, session):
    assert backend.get("nope") is None


def test_mark_revoked_stamps_once(backend, session):
    user = UserFactory()
    record = _record(user.id)
    backend.insert(record)

    first, second = T0 + timedelta(hours=1), T0 + timedelta(hours=2)
    assert backend.mark_revoked(record.token, at=first) is True
    assert backend.mark_revoked(record.token, at=second) is True

    row = backend.get(record.token)
    assert row.revoked_at == first
    assert row.updated_at == second
    assert row.expires_at == record.expires_at


def test_mark_revoked_unknown_token(backend, session):
    assert backend.mark_revoked("missing", at=T0) is False


def test_duplicate_token_is_a_storage_error(backend, session):
    user = UserFactory()
    record = _record(user.id)
    backend.insert(record)

    with pytest.raises(StorageError):
        backend.insert(record)
