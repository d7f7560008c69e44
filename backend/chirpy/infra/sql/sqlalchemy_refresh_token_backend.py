# comments in English; reST docstrings
from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from chirpy.models import RefreshToken
from chirpy.services._shared.errors import StorageError
from chirpy.services._shared.ports import RefreshTokenBackend, RefreshTokenRecord, as_utc
from chirpy.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _to_record(row: RefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        token=row.token,
        user_id=row.user_id,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        expires_at=as_utc(row.expires_at),
        revoked_at=as_utc(row.revoked_at) if row.revoked_at is not None else None,
    )


class SQLAlchemyRefreshTokenBackend(RefreshTokenBackend):
    """
    Relational refresh token rows (``refresh_tokens`` table).

    Each call runs in its own Unit of Work so a revocation is committed before
    the next check reads it. Driver errors surface as :class:`StorageError`.
    """

    def insert(self, record: RefreshTokenRecord) -> None:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                uow.refresh_tokens.add(
                    RefreshToken(
                        token=record.token,
                        user_id=record.user_id,
                        created_at=record.created_at,
                        updated_at=record.updated_at,
                        expires_at=record.expires_at,
                        revoked_at=record.revoked_at,
                    )
                )
        except SQLAlchemyError as exc:
            raise StorageError("Could not persist refresh token") from exc

    def get(self, token: str) -> RefreshTokenRecord | None:
        try:
            with SQLAlchemyReadOnlyUnitOfWork(isolation_level=None) as uow:
                row = uow.refresh_tokens.get(token)
                if row is None:
                    return None
                # Drop any cached copy so a concurrent revoke is observed.
                uow.session.refresh(row)
                return _to_record(row)
        except SQLAlchemyError as exc:
            raise StorageError("Could not read refresh token") from exc

    def mark_revoked(self, token: str, *, at: datetime) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                return uow.refresh_tokens.mark_revoked(token, at=at)
        except SQLAlchemyError as exc:
            raise StorageError("Could not revoke refresh token") from exc
