"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from chirpy.api.deps import current_user_id, json_response, require_auth, timing
from chirpy.schemas import UserCredentialsSchema, UserSchema
from chirpy.services.users.dto import UserCredentialsUpdateIn, UserRegisterIn
from chirpy.services.users.service import UserService

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
credentials_schema = UserCredentialsSchema()


@bp.post("")
@timing
def create_user():
    """Register a new account."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = UserService().register(UserRegisterIn(email=data["email"], password=data["password"]))
    return json_response(user_schema.dump(user), status=201)


@bp.put("")
@require_auth
@timing
def update_user():
    """Replace the caller's email and password."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = UserService().update_credentials(
        UserCredentialsUpdateIn(
            user_id=current_user_id(), email=data["email"], password=data["password"]
        )
    )
    return json_response(user_schema.dump(user))
