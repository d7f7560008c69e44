"""Unit tests for PasswordHasher."""

from __future__ import annotations

import pytest

from chirpy.services._shared.errors import HashingError
from chirpy.services.auth.passwords import PasswordHasher


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher()


def test_hash_then_verify_matches(hasher):
    hashed = hasher.hash("correct horse")
    assert hasher.verify("correct horse", hashed) is True


def test_wrong_password_is_false_not_error(hasher):
    hashed = hasher.hash("correct horse")
    assert hasher.verify("battery staple", hashed) is False


def test_hash_is_salted_and_self_describing(hasher):
    first = hasher.hash("same")
    second = hasher.hash("same")

    assert first != second
    assert first.startswith("scrypt")
    assert "same" not in first


def test_empty_password_hashes_like_any_other(hasher):
    hashed = hasher.hash("")
    assert hasher.verify("", hashed) is True
    assert hasher.verify("x", hashed) is False


@pytest.mark.parametrize("stored", ["", "not-a-hash", "scrypt$only-two", "md5$salt$digest"])
def test_malformed_stored_hash_raises(hasher, stored):
    with pytest.raises(HashingError):
        hasher.verify("anything", stored)


def test_pbkdf2_hashes_remain_verifiable():
    legacy = PasswordHasher(method="pbkdf2:sha256")
    hashed = legacy.hash("s3cret")
    assert PasswordHasher().verify("s3cret", hashed) is True
