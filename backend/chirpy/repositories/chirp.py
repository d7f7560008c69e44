"""Chirp repository."""

from __future__ import annotations

from uuid import UUID

from chirpy.models import Chirp
from chirpy.repositories.base import BaseRepository


class ChirpRepository(BaseRepository[Chirp]):
    """Persistence-only repository for :class:`Chirp`."""

    model = Chirp

    def _sortable_fields(self):
        return {"created_at": Chirp.created_at}

    def _filterable_fields(self):
        return {"user_id": Chirp.user_id}

    def list_chirps(self, *, author_id: UUID | None = None, descending: bool = False) -> list[Chirp]:
        """
        List chirps ordered by creation time.

        :param author_id: Restrict to one author when given.
        :param descending: Newest first when ``True``.
        """
        token = "-created_at" if descending else "created_at"
        return self.list(filters={"user_id": author_id}, sort=[token])
