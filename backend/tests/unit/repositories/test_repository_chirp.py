"""Unit tests for ChirpRepository and RefreshTokenRepository."""

from datetime import UTC, datetime, timedelta

import pytest

from chirpy.models import RefreshToken
from chirpy.repositories.chirp import ChirpRepository
from chirpy.repositories.refresh_token import RefreshTokenRepository
from tests.factories.chirp import ChirpFactory
from tests.factories.user import UserFactory

T0 = datetime(2026, 1, 10, 8, 0, tzinfo=UTC)


class TestChirpRepository:
    @pytest.fixture()
    def repo(self):
        return ChirpRepository()

    def test_list_orders_by_creation_time(self, repo, session):
        user = UserFactory()
        late = ChirpFactory(author=user, created_at=T0 + timedelta(seconds=5))
        early = ChirpFactory(author=user, created_at=T0)

        assert [c.id for c in repo.list_chirps()] == [early.id, late.id]
        assert [c.id for c in repo.list_chirps(descending=True)] == [late.id, early.id]

    def test_list_filters_by_author(self, repo, session):
        mine = ChirpFactory()
        ChirpFactory()

        out = repo.list_chirps(author_id=mine.user_id)
        assert [c.id for c in out] == [mine.id]

    def test_delete(self, repo, session):
        chirp = ChirpFactory()
        repo.delete(chirp)
        assert repo.get(chirp.id) is None


class TestRefreshTokenRepository:
    @pytest.fixture()
    def repo(self):
        return RefreshTokenRepository()

    @pytest.fixture()
    def token(self, repo, session):
        user = UserFactory()
        row = repo.add(
            RefreshToken(token="e" * 64, user_id=user.id, expires_at=T0 + timedelta(days=60))
        )
        return row.token

    def test_get_by_token(self, repo, token):
        assert repo.get(token).token == token

    def test_mark_revoked_sets_timestamp_once(self, repo, session, token):
        assert repo.mark_revoked(token, at=T0) is True
        assert repo.mark_revoked(token, at=T0 + timedelta(hours=1)) is True

        session.expire_all()
        row = repo.get(token)
        assert row.revoked_at.replace(tzinfo=UTC) == T0
        assert row.updated_at.replace(tzinfo=UTC) == T0 + timedelta(hours=1)

    def test_mark_revoked_unknown(self, repo, session):
        assert repo.mark_revoked("0" * 64, at=T0) is False

    def test_filter_by_owner(self, repo, session, token):
        owner = repo.get(token).user_id
        assert [r.token for r in repo.list(filters={"user_id": owner})] == [token]
