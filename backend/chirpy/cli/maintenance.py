"""Flask CLI commands for local database and session maintenance."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from chirpy.core.extensions import db
from chirpy.services._shared.errors import NotFoundError
from chirpy.services.auth.refresh_tokens import RefreshTokenStore

LOGGER = logging.getLogger(__name__)


def _ensure_dev_platform() -> None:
    """Abort destructive commands unless ``PLATFORM`` is ``dev``."""
    if current_app.config.get("PLATFORM") != "dev":
        raise click.UsageError(
            "The 'flask maintenance fresh' command is restricted to the dev platform."
        )


@click.group("maintenance")
def maintenance_cli() -> None:
    """Database and session maintenance commands."""


@maintenance_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def fresh_command(yes: bool) -> None:
    """Drop all tables and recreate the schema."""
    _ensure_dev_platform()
    if not yes:
        click.confirm(
            "This will DROP all application tables and recreate them. Continue?",
            abort=True,
        )
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    LOGGER.info("Recreating database schema...")
    db.create_all()
    click.echo("Schema recreated.")


@maintenance_cli.command("revoke-token")
@click.argument("token")
@with_appcontext
def revoke_token_command(token: str) -> None:
    """Revoke a refresh token by value."""
    from chirpy.api.deps import get_refresh_backend

    store = RefreshTokenStore(get_refresh_backend())
    try:
        store.revoke(token)
    except NotFoundError as exc:
        raise click.ClickException("Unknown refresh token.") from exc
    click.echo("Refresh token revoked.")
