"""Readiness endpoint."""

from __future__ import annotations

from flask import Blueprint, Response

from chirpy.api.deps import timing

bp = Blueprint("health", __name__)


@bp.get("/healthz")
@timing
def healthz():
    """Return a plain-text ``OK`` while the process is serving."""

    return Response("OK", status=200, mimetype="text/plain")
