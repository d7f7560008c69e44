"""Units of work over the Flask-scoped SQLAlchemy session.

Services open a read-write scope for mutations (users, chirps, refresh token
rows) and a read-only scope for lookups such as login or chirp listing.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
