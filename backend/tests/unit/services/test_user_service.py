"""Unit tests for UserService."""

from __future__ import annotations

from uuid import uuid4

import pytest

from chirpy.models import RefreshToken, User
from chirpy.services._shared.errors import ConflictError, NotFoundError
from chirpy.services.auth.passwords import PasswordHasher
from chirpy.services.users.dto import UserCredentialsUpdateIn, UserRegisterIn
from chirpy.services.users.service import UserService
from tests.factories.chirp import ChirpFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> UserService:
    return UserService()


def test_register_persists_hashed_password(service, session):
    out = service.register(UserRegisterIn(email="Walt@BreakingBad.com", password="04234"))

    assert out.email == "walt@breakingbad.com"
    assert out.is_chirpy_red is False
    assert out.created_at is not None

    stored = session.get(User, out.id)
    assert stored.hashed_password != "04234"
    assert PasswordHasher().verify("04234", stored.hashed_password)


def test_register_duplicate_email_conflicts(service, session):
    UserFactory(email="saul@example.com")

    with pytest.raises(ConflictError):
        service.register(UserRegisterIn(email="SAUL@example.com", password="x"))


def test_update_credentials_replaces_email_and_password(service, session):
    user = UserFactory(email="old@example.com")

    out = service.update_credentials(
        UserCredentialsUpdateIn(user_id=user.id, email="new@example.com", password="n3w")
    )

    assert out.id == user.id
    assert out.email == "new@example.com"
    stored = session.get(User, user.id)
    assert PasswordHasher().verify("n3w", stored.hashed_password)


def test_update_credentials_keeping_own_email(service, session):
    user = UserFactory(email="same@example.com")
    out = service.update_credentials(
        UserCredentialsUpdateIn(user_id=user.id, email="same@example.com", password="n3w")
    )
    assert out.email == "same@example.com"


def test_update_credentials_to_taken_email_conflicts(service, session):
    UserFactory(email="taken@example.com")
    user = UserFactory()

    with pytest.raises(ConflictError):
        service.update_credentials(
            UserCredentialsUpdateIn(user_id=user.id, email="taken@example.com", password="x")
        )


def test_update_credentials_for_missing_user(service, session):
    with pytest.raises(NotFoundError):
        service.update_credentials(
            UserCredentialsUpdateIn(user_id=uuid4(), email="a@example.com", password="x")
        )


def test_upgrade_to_red_is_idempotent(service, session):
    user = UserFactory()

    assert service.upgrade_to_red(user.id).is_chirpy_red is True
    assert service.upgrade_to_red(user.id).is_chirpy_red is True
    assert service.get(user.id).is_chirpy_red is True


def test_upgrade_unknown_user(service, session):
    with pytest.raises(NotFoundError):
        service.upgrade_to_red(uuid4())


def test_get_unknown_user(service, session):
    with pytest.raises(NotFoundError):
        service.get(uuid4())


def test_delete_all_removes_dependents(service, session, session_service):
    from chirpy.services.auth.dto import LoginIn
    from tests.factories.user import DEFAULT_PASSWORD

    author = UserFactory()
    ChirpFactory.create_batch(2, author=author)
    session_service.login(LoginIn(email=author.email, password=DEFAULT_PASSWORD))

    assert service.delete_all() == 1

    assert session.query(User).count() == 0
    assert session.query(RefreshToken).count() == 0
