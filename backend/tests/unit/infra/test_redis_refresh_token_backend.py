"""Redis refresh token backend using fakeredis."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import fakeredis
import pytest
from redis.client import Pipeline
from redis.exceptions import ConnectionError as RedisConnectionError

from chirpy.infra.redis import RedisRefreshTokenBackend
from chirpy.services._shared.errors import StorageError
from chirpy.services._shared.ports import RefreshTokenRecord
from chirpy.services.auth.refresh_tokens import RefreshTokenStore

T0 = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture()
def r():
    return fakeredis.FakeRedis()


@pytest.fixture()
def backend(r) -> RedisRefreshTokenBackend:
    return RedisRefreshTokenBackend(r)


def _record(token: str = "a" * 64) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        token=token,
        user_id=uuid4(),
        created_at=T0,
        updated_at=T0,
        expires_at=T0 + timedelta(days=60),
    )


def test_insert_then_get(backend, r):
    record = _record()
    backend.insert(record)

    assert backend.get(record.token) == record
    # No TTL: expired rows must stay distinguishable from unknown ones.
    assert r.ttl(f"rt:{record.token}") == -1


def test_get_unknown_returns_none(backend):
    assert backend.get("missing") is None


def test_duplicate_insert_is_rejected(backend):
    record = _record()
    backend.insert(record)
    with pytest.raises(StorageError):
        backend.insert(record)


def test_insert_loses_to_a_concurrent_writer(backend, r, monkeypatch):
    record = _record()
    key = f"rt:{record.token}"
    queue_writes = Pipeline.multi

    def _multi_after_rival_write(pipe):
        r.hset(key, "user_id", "rival")
        queue_writes(pipe)

    monkeypatch.setattr(Pipeline, "multi", _multi_after_rival_write)

    with pytest.raises(StorageError):
        backend.insert(record)
    # Nothing of ours was mixed into the rival's hash.
    assert r.hgetall(key) == {b"user_id": b"rival"}


def test_mark_revoked_keeps_first_timestamp(backend):
    record = _record()
    backend.insert(record)

    first, second = T0 + timedelta(minutes=5), T0 + timedelta(minutes=10)
    assert backend.mark_revoked(record.token, at=first) is True
    assert backend.mark_revoked(record.token, at=second) is True

    row = backend.get(record.token)
    assert row.revoked_at == first
    assert row.updated_at == second


def test_mark_revoked_unknown(backend, r):
    assert backend.mark_revoked("missing", at=T0) is False
    assert not r.exists("rt:missing")


def test_store_over_redis_lifecycle(backend):
    now = [T0]
    store = RefreshTokenStore(backend, clock=lambda: now[0])
    user_id = uuid4()

    token = store.issue(user_id)
    assert store.check_usable(token).user_id == user_id

    store.revoke(token)
    assert store.resolve_owner(token) == user_id
    assert backend.get(token).revoked_at == T0


def test_driver_errors_become_storage_errors():
    class Down(fakeredis.FakeRedis):
        def hgetall(self, *args, **kwargs):
            raise RedisConnectionError("connection refused")

    with pytest.raises(StorageError):
        RedisRefreshTokenBackend(Down()).get("x")
