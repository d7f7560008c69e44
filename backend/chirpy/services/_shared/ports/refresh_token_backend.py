from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from chirpy.services._shared.errors import StorageError


def as_utc(dt: datetime) -> datetime:
    """Label naive datetimes as UTC (SQLite drops tzinfo) and normalise aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Read-model for a persisted refresh token.

    :ivar token: Opaque token string (primary key).
    :ivar user_id: Owning user; immutable after creation.
    :ivar created_at: Issuance time (UTC).
    :ivar updated_at: Last mutation time (UTC).
    :ivar expires_at: Absolute expiry fixed at issuance (UTC).
    :ivar revoked_at: Revocation time, ``None`` while active.
    """

    token: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime
    expires_at: datetime
    revoked_at: datetime | None = None

    def is_usable(self, now: datetime) -> bool:
        """``revoked_at IS NULL AND now < expires_at``."""
        return self.revoked_at is None and as_utc(now) < as_utc(self.expires_at)


class RefreshTokenBackend(Protocol):
    """
    Row-level persistence for refresh tokens.

    Implementations translate driver failures into
    :class:`~chirpy.services._shared.errors.StorageError`. Rows are never
    deleted; the only mutation is setting ``revoked_at``.
    """

    def insert(self, record: RefreshTokenRecord) -> None:
        """Persist a brand-new token row."""

    def get(self, token: str) -> RefreshTokenRecord | None:
        """Fetch the current row state, or ``None`` when absent."""

    def mark_revoked(self, token: str, *, at: datetime) -> bool:
        """
        Set ``revoked_at`` (kept if already set) and ``updated_at`` to ``at``.

        :returns: ``True`` if the token existed.
        """


class InMemoryRefreshTokenBackend(RefreshTokenBackend):
    """
    In-memory refresh token rows for unit tests.

    .. note::
       Uses a threading lock so concurrent revoke/check calls stay consistent.
    """

    def __init__(self) -> None:
        self._rows: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def insert(self, record: RefreshTokenRecord) -> None:
        with self._lock:
            if record.token in self._rows:
                raise StorageError("Duplicate refresh token")
            self._rows[record.token] = record

    def get(self, token: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._rows.get(token)

    def mark_revoked(self, token: str, *, at: datetime) -> bool:
        with self._lock:
            row = self._rows.get(token)
            if row is None:
                return False
            self._rows[token] = replace(
                row, revoked_at=row.revoked_at or at, updated_at=at
            )
            return True
