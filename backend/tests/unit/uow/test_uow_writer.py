"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest

from chirpy.models import RefreshToken, User
from chirpy.uow import SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a user via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        after = db.session.query(User).count()
        assert after == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        after = db.session.query(User).count()
        assert after == initial

    def test_repositories_share_the_session(self, app, db, session):
        with SQLAlchemyUnitOfWork() as uow:
            assert uow.users.session is uow.refresh_tokens.session is uow.chirps.session
            assert uow.session is db.session

    def test_commit_is_visible_to_other_repositories(self, app, db, session):
        from datetime import UTC, datetime, timedelta

        now = datetime.now(UTC)
        with SQLAlchemyUnitOfWork() as uow:
            user = uow.users.add(UserFactory.build())
            uow.refresh_tokens.add(
                RefreshToken(
                    token="f" * 64,
                    user_id=user.id,
                    expires_at=now + timedelta(days=60),
                )
            )

        assert db.session.get(RefreshToken, "f" * 64).user_id == user.id
