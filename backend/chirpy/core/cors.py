"""Cross-origin policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from chirpy.core.logger import REQUEST_ID_HEADER

API_RESOURCES = r"/api/*"


def parse_origins(raw: str | None) -> list[str] | str:
    """Split ``CORS_ORIGINS`` into a list, or ``"*"`` when blank or wildcard."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or origins == ["*"]:
        return "*"
    return origins


def init_app(app: Flask) -> None:
    """Allow browser clients on ``CORS_ORIGINS`` to call ``/api/*``.

    Authentication travels in the ``Authorization`` header, never in cookies,
    so credentialed CORS stays off. The admin and static mounts are
    same-origin only.
    """
    CORS(
        app,
        resources={
            API_RESOURCES: {
                "origins": parse_origins(app.config.get("CORS_ORIGINS")),
                "allow_headers": ["Authorization", "Content-Type", REQUEST_ID_HEADER],
                "expose_headers": [REQUEST_ID_HEADER],
                "methods": ["GET", "POST", "PUT", "DELETE"],
            }
        },
        supports_credentials=False,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
