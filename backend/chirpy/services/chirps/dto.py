# chirpy/services/chirps/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ChirpCreateIn:
    """
    Input DTO for posting a chirp.

    :param user_id: Authenticated author.
    :param body: Chirp text.
    """

    user_id: UUID
    body: str


@dataclass(frozen=True, slots=True)
class ChirpListIn:
    """
    Listing filters.

    :param author_id: Only chirps by this user, when given.
    :param descending: Newest first when ``True``.
    """

    author_id: UUID | None = None
    descending: bool = False


@dataclass(frozen=True, slots=True)
class ChirpOut:
    id: UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: UUID

    @classmethod
    def from_model(cls, chirp: Any) -> ChirpOut:
        return cls(
            id=chirp.id,
            created_at=chirp.created_at,
            updated_at=chirp.updated_at,
            body=chirp.body,
            user_id=chirp.user_id,
        )
