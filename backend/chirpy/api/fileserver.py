"""Static file server mounted under ``/app``."""

from __future__ import annotations

import os

from flask import Blueprint, current_app, send_from_directory

from chirpy.core.metrics import get_hit_counter

bp = Blueprint("fileserver", __name__)


@bp.get("/", defaults={"path": "index.html"})
@bp.get("/<path:path>")
def serve(path: str):
    """Serve ``FILESERVER_ROOT/<path>``; every request counts as one hit."""

    get_hit_counter().increment()
    root = os.path.abspath(current_app.config.get("FILESERVER_ROOT", "."))
    if path.endswith("/"):
        path = f"{path}index.html"
    return send_from_directory(root, path)
