"""Issuance, lookup and revocation of opaque refresh tokens."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

from chirpy.services._shared.errors import NotFoundError, TokenRevokedOrExpiredError
from chirpy.services._shared.ports import RefreshTokenBackend, RefreshTokenRecord

log = logging.getLogger(__name__)

# 32 random bytes -> 64 hex chars, 256 bits of entropy, no embedded structure.
TOKEN_BYTES = 32
DEFAULT_REFRESH_TTL = timedelta(days=60)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RefreshTokenStore:
    """
    Long-lived refresh tokens over a pluggable :class:`RefreshTokenBackend`.

    Every check re-reads the backend so a concurrent :meth:`revoke` is seen by
    the next :meth:`check_usable`. Unknown tokens raise :class:`NotFoundError`
    here; hiding that from callers is the session service's job.
    """

    def __init__(
        self,
        backend: RefreshTokenBackend,
        *,
        ttl: timedelta = DEFAULT_REFRESH_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.backend = backend
        self.ttl = ttl
        self._clock = clock

    def issue(self, user_id: UUID) -> str:
        """
        Create and persist a token for ``user_id`` expiring at ``now + ttl``.

        :raises StorageError: If the backend cannot persist the row.
        """
        now = self._clock()
        token = secrets.token_hex(TOKEN_BYTES)
        self.backend.insert(
            RefreshTokenRecord(
                token=token,
                user_id=user_id,
                created_at=now,
                updated_at=now,
                expires_at=now + self.ttl,
                revoked_at=None,
            )
        )
        log.info("refresh_token.issued", extra={"user_id": str(user_id)})
        return token

    def resolve_owner(self, token: str) -> UUID:
        """
        Return the owning user id whatever the token's state.

        :raises NotFoundError: If no such token exists.
        """
        return self._require(token).user_id

    def check_usable(self, token: str) -> RefreshTokenRecord:
        """
        Return the current row if it is neither revoked nor expired.

        :raises NotFoundError: If no such token exists.
        :raises TokenRevokedOrExpiredError: If revoked or ``now >= expires_at``.
        """
        record = self._require(token)
        if not record.is_usable(self._clock()):
            raise TokenRevokedOrExpiredError("Refresh token is revoked or expired")
        return record

    def revoke(self, token: str) -> None:
        """
        Mark the token revoked. Revoking twice is not an error.

        :raises NotFoundError: If no such token exists.
        :raises StorageError: If the backend cannot persist the change.
        """
        if not self.backend.mark_revoked(token, at=self._clock()):
            raise NotFoundError("RefreshToken", "<redacted>")

    def _require(self, token: str) -> RefreshTokenRecord:
        record = self.backend.get(token)
        if record is None:
            raise NotFoundError("RefreshToken", "<redacted>")
        return record
