"""Refresh token repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import update

from chirpy.models import RefreshToken
from chirpy.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken` rows."""

    model = RefreshToken

    def _pk_attr(self):
        return RefreshToken.token

    def _filterable_fields(self):
        return {"user_id": RefreshToken.user_id}

    def mark_revoked(self, token: str, *, at: datetime) -> bool:
        """
        Stamp ``revoked_at`` once and bump ``updated_at`` on every call.

        The ``revoked_at`` write is conditional on ``revoked_at IS NULL`` so a
        concurrent revocation cannot overwrite the first timestamp.

        :param token: Token value (primary key).
        :param at: Revocation instant.
        :returns: ``True`` if the row exists.
        """
        touched = self.session.execute(
            update(RefreshToken).where(RefreshToken.token == token).values(updated_at=at)
        ).rowcount
        if not touched:
            return False
        self.session.execute(
            update(RefreshToken)
            .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=at)
        )
        return True
