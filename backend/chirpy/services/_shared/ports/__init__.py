"""
chirpy.services._shared.ports
=============================

*Ports* (hexagonal interfaces) that decouple the session services from the
concrete persistence used for refresh tokens.

Modules
-------
- :mod:`refresh_token_backend`:
    Defines :class:`~.RefreshTokenBackend` (row CRUD contract),
    :class:`~.RefreshTokenRecord` (read-model) and
    :class:`~.InMemoryRefreshTokenBackend` (unit-test double).

Concrete adapters live under ``chirpy.infra`` (SQLAlchemy and Redis).
"""

from __future__ import annotations

from .refresh_token_backend import (
    InMemoryRefreshTokenBackend,
    RefreshTokenBackend,
    RefreshTokenRecord,
    as_utc,
)

__all__ = [
    "RefreshTokenBackend",
    "RefreshTokenRecord",
    "InMemoryRefreshTokenBackend",
    "as_utc",
]
