"""``flask maintenance ...`` commands."""

from __future__ import annotations

from flask import Flask

from .maintenance import maintenance_cli


def init_app(app: Flask) -> None:
    app.cli.add_command(maintenance_cli)
