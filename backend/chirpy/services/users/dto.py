# chirpy/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param email: Login email.
    :param password: Raw password; hashed before it reaches storage.
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserCredentialsUpdateIn:
    """
    Input DTO for replacing the caller's email and password.

    :param user_id: Authenticated user performing the change.
    :param email: New email.
    :param password: New raw password.
    """

    user_id: UUID
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public user profile. Never carries the password hash."""

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime
    is_chirpy_red: bool

    @classmethod
    def from_model(cls, user: Any) -> UserPublicOut:
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
            is_chirpy_red=bool(user.is_chirpy_red),
        )
