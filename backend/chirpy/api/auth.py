"""Session endpoints: login, refresh, revoke."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, current_app, request

from chirpy.api.deps import empty_response, extractor, get_session_service, json_response, timing
from chirpy.core.extensions import limiter
from chirpy.schemas import LoginResponseSchema, LoginSchema, TokenResponseSchema
from chirpy.services.auth.dto import LoginIn, RefreshIn, RevokeIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
token_schema = TokenResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials and return the user with a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = get_session_service().login(
        LoginIn(
            email=data["email"],
            password=data["password"],
            expires_in_seconds=data.get("expires_in_seconds"),
        )
    )
    body = {
        **asdict(result.user),
        "token": result.access_token,
        "refresh_token": result.refresh_token,
    }
    return json_response(login_response_schema.dump(body))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the bearer refresh token for a new access token."""

    token = extractor.bearer_token(request.headers)
    out = get_session_service().refresh(RefreshIn(refresh_token=token))
    return json_response(token_schema.dump({"token": out.access_token}))


@bp.post("/revoke")
@timing
def revoke():
    """Revoke the bearer refresh token. Always 204 once the header parses."""

    token = extractor.bearer_token(request.headers)
    get_session_service().revoke(RevokeIn(refresh_token=token))
    return empty_response()
