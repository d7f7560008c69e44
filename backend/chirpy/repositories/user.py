"""User repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from chirpy.models import Chirp, RefreshToken, User
from chirpy.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes passwords or issues tokens; services hand it ready-made
    values.
    """

    model = User

    def _sortable_fields(self):
        return {"email": User.email, "created_at": User.created_at}

    def _filterable_fields(self):
        return {"email": User.email}

    def _updatable_fields(self):
        return {"email", "hashed_password", "is_chirpy_red"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Bulk ops ----------------------------

    def delete_all(self) -> int:
        """Delete every user together with their chirps and refresh tokens.

        Dependent rows are removed explicitly so the result does not depend on
        the backend enforcing ``ON DELETE CASCADE``.

        :returns: Number of deleted users.
        :rtype: int
        """
        self.session.execute(delete(Chirp))
        self.session.execute(delete(RefreshToken))
        result = self.session.execute(delete(User))
        self.session.expunge_all()
        return int(result.rowcount or 0)
