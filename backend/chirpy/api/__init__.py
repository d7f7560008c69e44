"""HTTP surface, mounted in three groups.

``/api``
    JSON endpoints: health, users, sessions, chirps, billing webhook.
``/admin``
    Operator pages: hit metrics and the dev-only reset.
``/app``
    Static files; every request counts as a hit.
"""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` under ``base_prefix``.

    An empty relative prefix mounts the blueprint at the group root, e.g.
    ``("/api", "")`` serves ``/api/login``.
    """
    for bp, rel_prefix in entries:
        segments = [s for s in (base_prefix.strip("/"), rel_prefix.strip("/")) if s]
        app.register_blueprint(bp, url_prefix="/" + "/".join(segments))


def init_app(app: Flask) -> None:
    # Local imports keep blueprint modules (and their service imports) lazy.
    from chirpy.api.admin import bp as admin_bp
    from chirpy.api.auth import bp as auth_bp
    from chirpy.api.chirps import bp as chirps_bp
    from chirpy.api.fileserver import bp as fileserver_bp
    from chirpy.api.health import bp as health_bp
    from chirpy.api.users import bp as users_bp
    from chirpy.api.webhooks import bp as webhooks_bp

    register_blueprint_group(
        app,
        base_prefix=app.config.get("API_BASE_PREFIX", "/api"),
        entries=[
            (health_bp, ""),  # /api/healthz
            (auth_bp, ""),  # /api/login, /api/refresh, /api/revoke
            (users_bp, "/users"),
            (chirps_bp, "/chirps"),
            (webhooks_bp, "/polka"),
        ],
    )
    register_blueprint_group(app, base_prefix="/admin", entries=[(admin_bp, "")])
    register_blueprint_group(app, base_prefix="/app", entries=[(fileserver_bp, "")])


__all__ = ["init_app", "register_blueprint_group"]
