"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases.
"""

from __future__ import annotations

import os
from datetime import timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from chirpy.core.config import TestingConfig
from chirpy.core.extensions import db as _db  # Flask-SQLAlchemy instance
from chirpy.factory import create_app  # application factory under test
from chirpy.infra.sql import SQLAlchemyRefreshTokenBackend
from chirpy.services._shared.ports import InMemoryRefreshTokenBackend
from chirpy.services.auth.dto import AuthTokenConfig
from chirpy.services.auth.refresh_tokens import RefreshTokenStore
from chirpy.services.auth.service import SessionService

JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"


@pytest.fixture(scope="session")
def static_root(tmp_path_factory):
    """Directory served by the ``/app`` file server during tests."""
    root = tmp_path_factory.mktemp("static")
    (root / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    (root / "assets").mkdir()
    (root / "assets" / "logo.txt").write_text("chirp")
    return root


@pytest.fixture(scope="session")
def app(static_root):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """

    class TestConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        JWT_SECRET = JWT_SECRET
        POLKA_KEY = POLKA_KEY
        PLATFORM = "dev"
        FILESERVER_ROOT = str(static_root)
        USE_PROXYFIX = False

    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


def _enable_sqlite_savepoints(engine) -> None:
    """Let SQLAlchemy own BEGIN on pysqlite so SAVEPOINTs nest correctly."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture follows the SQLAlchemy 2.0 recipe for transactional tests: it
    begins a top-level transaction on the shared connection and lets the
    session run every ``commit()``/``rollback()`` against its own SAVEPOINT,
    so units of work behave normally while the outer transaction is rolled
    back at teardown.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(SessionFactory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Services -------------------------------------------------------------------
@pytest.fixture()
def token_cfg() -> AuthTokenConfig:
    return AuthTokenConfig(
        signing_secret=JWT_SECRET,
        access_expires=timedelta(hours=1),
        refresh_expires=timedelta(days=60),
    )


@pytest.fixture()
def session_service(token_cfg) -> SessionService:
    """SessionService persisting refresh tokens in the test database."""
    store = RefreshTokenStore(SQLAlchemyRefreshTokenBackend(), ttl=token_cfg.refresh_expires)
    return SessionService(refresh_store=store, token_cfg=token_cfg)


@pytest.fixture()
def memory_session_service(token_cfg) -> SessionService:
    """SessionService keeping refresh tokens in process memory."""
    store = RefreshTokenStore(InMemoryRefreshTokenBackend(), ttl=token_cfg.refresh_expires)
    return SessionService(refresh_store=store, token_cfg=token_cfg)


# -- HTTP -----------------------------------------------------------------------
@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def hit_counter(app):
    from chirpy.core.metrics import EXTENSION_KEY

    counter = app.extensions[EXTENSION_KEY]
    counter.reset()
    yield counter
    counter.reset()
