# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError, WatchError  # type: ignore[import-untyped]

from chirpy.services._shared.errors import StorageError
from chirpy.services._shared.ports import RefreshTokenBackend, RefreshTokenRecord, as_utc


@dataclass(slots=True)
class RedisRefreshTokenBackend(RefreshTokenBackend):
    """
    Redis-backed refresh token rows, one hash per token.

    Keys carry no TTL: expired and revoked rows stay readable so a check can
    tell them apart from unknown tokens.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        return f"rt:{token}"

    @staticmethod
    def _ts(dt: datetime) -> str:
        return as_utc(dt).isoformat()

    @staticmethod
    def _dt(raw: bytes | None) -> datetime | None:
        if not raw:
            return None
        return as_utc(datetime.fromisoformat(raw.decode()))

    # -------------------- API ------------------------

    def insert(self, record: RefreshTokenRecord) -> None:
        """
        Write the whole hash in one MULTI so readers never see a partial row.

        :raises StorageError: If the token already exists or Redis fails.
        """
        key = self._k(record.token)
        fields = {
            "user_id": str(record.user_id),
            "created_at": self._ts(record.created_at),
            "updated_at": self._ts(record.updated_at),
            "expires_at": self._ts(record.expires_at),
        }
        try:
            with self.r.pipeline() as p:
                p.watch(key)
                if p.exists(key):
                    p.unwatch()
                    raise StorageError("Duplicate refresh token")
                p.multi()
                p.hset(key, mapping=fields)
                p.execute()
        except WatchError as exc:
            # Someone wrote the same key between WATCH and EXEC.
            raise StorageError("Duplicate refresh token") from exc
        except RedisError as exc:
            raise StorageError("Could not persist refresh token") from exc

    def get(self, token: str) -> RefreshTokenRecord | None:
        try:
            h = self.r.hgetall(self._k(token))
        except RedisError as exc:
            raise StorageError("Could not read refresh token") from exc
        if not h or b"expires_at" not in h:
            return None
        return RefreshTokenRecord(
            token=token,
            user_id=UUID(h[b"user_id"].decode()),
            created_at=self._dt(h.get(b"created_at")),
            updated_at=self._dt(h.get(b"updated_at")),
            expires_at=self._dt(h.get(b"expires_at")),
            revoked_at=self._dt(h.get(b"revoked_at")),
        )

    def mark_revoked(self, token: str, *, at: datetime) -> bool:
        """
        Stamp ``revoked_at`` once and bump ``updated_at``.

        Uses WATCH/MULTI/EXEC so two concurrent revocations cannot both write
        ``revoked_at``.
        """
        key = self._k(token)
        try:
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(key)
                        if not p.exists(key):
                            p.unwatch()
                            return False
                        already = p.hexists(key, "revoked_at")
                        p.multi()
                        p.hset(key, "updated_at", self._ts(at))
                        if not already:
                            p.hset(key, "revoked_at", self._ts(at))
                        p.execute()
                        return True
                except WatchError:
                    # Concurrent modification detected; retry.
                    continue
        except RedisError as exc:
            raise StorageError("Could not revoke refresh token") from exc
