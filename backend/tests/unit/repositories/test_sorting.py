"""Whitelisted sorting helpers."""

from sqlalchemy import select

from chirpy.models import Chirp
from chirpy.repositories.base import apply_sorting, parse_sort_tokens


def test_parse_sort_tokens():
    assert parse_sort_tokens(["-created_at", " body ", "", "-"]) == [
        ("created_at", True),
        ("body", False),
    ]


def test_unknown_tokens_are_ignored_and_pk_breaks_ties():
    stmt = apply_sorting(
        select(Chirp),
        {"created_at": Chirp.created_at},
        ["-created_at", "body; DROP TABLE chirps"],
        pk_attr=Chirp.id,
    )
    sql = str(stmt).lower()
    assert "order by chirps.created_at desc, chirps.id asc" in sql
    assert "drop" not in sql
