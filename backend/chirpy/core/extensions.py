"""Flask extension singletons and their wiring."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

REDIS_EXTENSION_KEY = "redis_client"

# Deterministic constraint names so migrations and IntegrityError checks
# (``uq_users_email``) agree across backends.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
# Only ``POST /api/login`` carries a limit; everything else is unlimited.
limiter = Limiter(key_func=get_remote_address)


def init_redis(app: Flask) -> redis.Redis | None:
    """
    Connect to ``REDIS_URL`` and publish the client on ``app.extensions``.

    Refresh tokens move to Redis whenever this returns a client.

    :returns: The connected client, or ``None`` when ``REDIS_URL`` is unset.
    :raises RuntimeError: If the server does not answer ``PING``.
    """
    url = app.config.get("REDIS_URL")
    if not url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        return None
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client
    return client


def init_app(app: Flask) -> None:
    """Bind the database, migrations, the login limiter and optional Redis."""
    db.init_app(app)

    # Register the mapped classes on ``metadata`` before Alembic inspects it.
    from chirpy import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)
    init_redis(app)
