"""
UserService
===========

Aggregate service responsible for the ``User`` aggregate:
- Registration with email uniqueness
- Credential replacement for the authenticated user
- Membership upgrade triggered by the billing webhook
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import ConflictError, NotFoundError, violates
from chirpy.services.auth.passwords import PasswordHasher
from chirpy.services.users.dto import UserCredentialsUpdateIn, UserPublicOut, UserRegisterIn

log = logging.getLogger(__name__)


def _is_email_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL reports the constraint name, SQLite the column.
    return violates(exc, "uq_users_email") or violates(exc, "users.email")


class UserService(BaseService):
    """
    Application service for the ``User`` aggregate.

    Passwords are hashed here with :class:`PasswordHasher` before they reach
    the repository; the model only ever stores the hash.
    """

    def __init__(
        self, *, hasher: PasswordHasher | None = None, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.hasher = hasher or PasswordHasher()

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        :param dto: User registration input DTO.
        :type dto: UserRegisterIn
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises ConflictError: If the email is already in use.
        """
        hashed = self.hasher.hash(dto.password)
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_email(dto.email):
                    raise ConflictError("User", "email already in use")
                user = repo.add(repo.model(email=dto.email, hashed_password=hashed))
                out = UserPublicOut.from_model(user)
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise ConflictError("User", "email already in use") from exc
            raise

        log.info("user.registered", extra={"user_id": str(out.id)})
        return out

    def update_credentials(self, dto: UserCredentialsUpdateIn) -> UserPublicOut:
        """
        Replace the email and password of an existing user.

        :raises NotFoundError: If the user no longer exists.
        :raises ConflictError: If the new email belongs to someone else.
        """
        hashed = self.hasher.hash(dto.password)
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get(dto.user_id)
                if user is None:
                    raise NotFoundError("User", str(dto.user_id))
                other = repo.get_by_email(dto.email)
                if other is not None and other.id != user.id:
                    raise ConflictError("User", "email already in use")
                repo.update(user, email=dto.email, hashed_password=hashed)
                out = UserPublicOut.from_model(user)
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise ConflictError("User", "email already in use") from exc
            raise

        log.info("user.credentials_updated", extra={"user_id": str(out.id)})
        return out

    def upgrade_to_red(self, user_id: UUID) -> UserPublicOut:
        """
        Flag the user as a Chirpy Red member. Idempotent.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", str(user_id))
            repo.update(user, is_chirpy_red=True)
            out = UserPublicOut.from_model(user)

        log.info("user.upgraded", extra={"user_id": str(out.id)})
        return out

    def get(self, user_id: UUID) -> UserPublicOut:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", str(user_id))
            return UserPublicOut.from_model(user)

    def delete_all(self) -> int:
        """Remove every user (cascading to their tokens and chirps)."""
        with self.rw_uow() as uow:
            count = uow.users.delete_all()
        log.warning("user.deleted_all count=%d", count)
        return count
