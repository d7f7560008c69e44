"""Operator endpoints: hit metrics and the development reset."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app

from chirpy.api.deps import timing
from chirpy.core.errors import Forbidden
from chirpy.core.metrics import get_hit_counter
from chirpy.services.users.service import UserService

log = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
@timing
def metrics():
    """Render the file server hit count."""

    hits = get_hit_counter().value
    return Response(METRICS_TEMPLATE.format(hits=hits), status=200, mimetype="text/html")


@bp.post("/reset")
@timing
def reset():
    """Zero the hit counter and delete every user. Development platform only."""

    if current_app.config.get("PLATFORM") != "dev":
        raise Forbidden("Reset is only allowed in dev environment.")
    get_hit_counter().reset()
    deleted = UserService().delete_all()
    log.warning("admin.reset", extra={"event": f"deleted_users={deleted}"})
    return Response("Hits reset to 0 and database reset to initial state.", mimetype="text/plain")
