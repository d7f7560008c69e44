"""Chirp endpoints."""

from __future__ import annotations

from uuid import UUID

from flask import Blueprint, request

from chirpy.api.deps import current_user_id, empty_response, json_response, require_auth, timing
from chirpy.schemas import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema
from chirpy.services.chirps.dto import ChirpCreateIn, ChirpListIn
from chirpy.services.chirps.service import ChirpService

bp = Blueprint("chirps", __name__, url_prefix="/chirps")

chirp_schema = ChirpSchema()
chirp_list_schema = ChirpSchema(many=True)
chirp_create_schema = ChirpCreateSchema()
chirp_query_schema = ChirpListQuerySchema()


@bp.post("")
@require_auth
@timing
def create_chirp():
    """Post a chirp as the authenticated user."""

    data = chirp_create_schema.load(request.get_json(silent=True) or {})
    chirp = ChirpService().create(ChirpCreateIn(user_id=current_user_id(), body=data["body"]))
    return json_response(chirp_schema.dump(chirp), status=201)


@bp.get("")
@timing
def list_chirps():
    """List chirps, optionally by author, ordered by creation time."""

    query = chirp_query_schema.load(request.args)
    chirps = ChirpService().list(
        ChirpListIn(author_id=query["author_id"], descending=query["sort"] == "desc")
    )
    return json_response(chirp_list_schema.dump(chirps))


@bp.get("/<uuid:chirp_id>")
@timing
def get_chirp(chirp_id: UUID):
    chirp = ChirpService().get(chirp_id)
    return json_response(chirp_schema.dump(chirp))


@bp.delete("/<uuid:chirp_id>")
@require_auth
@timing
def delete_chirp(chirp_id: UUID):
    """Delete one of the caller's chirps (404 if missing, 403 if not theirs)."""

    ChirpService().delete(chirp_id, current_user_id())
    return empty_response()
