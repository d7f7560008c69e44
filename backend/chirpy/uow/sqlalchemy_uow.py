"""
Units of work over the Flask-scoped SQLAlchemy session.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session

from chirpy.core.extensions import db
from chirpy.repositories import ChirpRepository, RefreshTokenRepository, UserRepository
from chirpy.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Repositories bound to one shared session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.refresh_tokens = RefreshTokenRepository(session=session)
        self.chirps = ChirpRepository(session=session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write scope: commit on clean exit, roll back on any exception.

    A failed commit is rolled back and re-raised, so callers see the original
    ``IntegrityError`` (e.g. a duplicate email) rather than a broken session.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only scope for lookups (login, chirp listing, refresh token checks).

    While open, any ORM flush with pending changes and any DML/DDL statement on
    the session's connection raises :class:`RuntimeError`. On PostgreSQL and
    MySQL the transaction is additionally marked ``READ ONLY`` (and given the
    requested isolation level) when this scope opened it. ``commit()`` always
    raises; leaving the scope rolls back whatever it began.

    Parameters
    ----------
    isolation_level:
        ``SET TRANSACTION ISOLATION LEVEL`` value, or ``None`` to keep the
        connection default.
    enforce_db_readonly:
        Emit ``SET TRANSACTION READ ONLY`` where supported.

    Notes
    -----
    When a transaction is already open on the session (an enclosing service
    call, or the test fixture's SAVEPOINT), the scope joins it; the guards
    still apply but no directives are sent.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )
    _DIRECTIVE_DIALECTS = ("postgresql", "mysql", "mariadb")
    _ISOLATION_LEVELS = ("READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE", "READ UNCOMMITTED")

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._owns_txn = False
        self._sess: Session | None = None
        self._conn = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # ``db.session`` is a scoped_session registry; events and transaction
        # state belong to the Session it currently holds.
        self._sess = self.session()
        self._owns_txn = not self._sess.in_transaction()
        if self._owns_txn:
            self._sess.begin()
        self._conn = self._sess.connection()
        self._install_guards()
        if self._owns_txn and self._conn.dialect.name in self._DIRECTIVE_DIALECTS:
            self._apply_directives()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owns_txn:
                with suppress(SQLAlchemyError):
                    self._sess.rollback()
        finally:
            self._remove_guards()
            self._owns_txn = False
            self._sess = None
            self._conn = None

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ------------------------------------------------------------------ #

    def _apply_directives(self) -> None:
        try:
            if self.isolation_level:
                iso = self.isolation_level.upper().strip()
                if iso not in self._ISOLATION_LEVELS:
                    log.warning("Unknown isolation level %r; sending it as-is.", iso)
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
            if self.enforce_db_readonly:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            log.warning("SET TRANSACTION failed (%s); relying on guards only.", exc)

    def _block_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _block_writes(self, conn, cursor, statement, parameters, context, executemany) -> None:
        verb = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if verb.startswith(self._WRITE_PREFIXES):
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {verb.upper()}")

    def _install_guards(self) -> None:
        event.listen(self._sess, "before_flush", self._block_flush)
        event.listen(self._conn, "before_cursor_execute", self._block_writes)

    def _remove_guards(self) -> None:
        if self._sess is not None:
            with suppress(InvalidRequestError):
                event.remove(self._sess, "before_flush", self._block_flush)
        if self._conn is not None:
            with suppress(InvalidRequestError):
                event.remove(self._conn, "before_cursor_execute", self._block_writes)
