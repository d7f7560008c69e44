"""CORS origin parsing and headers on the API mount."""

from __future__ import annotations

import pytest

from chirpy.core.cors import parse_origins


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "*"),
        ("", "*"),
        ("*", "*"),
        ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
    ],
)
def test_parse_origins(raw, expected):
    assert parse_origins(raw) == expected


def test_preflight_allows_authorization_header(app, client):
    origin = parse_origins(app.config["CORS_ORIGINS"])
    origin = origin[0] if isinstance(origin, list) else "http://example.test"

    resp = client.options(
        "/api/chirps",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization",
        },
    )

    assert resp.headers["Access-Control-Allow-Origin"] in (origin, "*")
    assert "authorization" in resp.headers["Access-Control-Allow-Headers"].lower()
