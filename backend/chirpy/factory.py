"""Application factory: config, extensions, HTTP surface and CLI."""

from __future__ import annotations

from flask import Flask

from chirpy.core.config import BaseConfig, get_config
from chirpy.core.logger import configure_logging

PLACEHOLDER_SECRET_PREFIX = "CHANGE_ME"


def _check_secrets(app: Flask) -> None:
    """Refuse to boot outside dev/testing with the placeholder signing secret."""
    if app.testing or app.config.get("PLATFORM") == "dev":
        return
    if str(app.config.get("JWT_SECRET", "")).startswith(PLACEHOLDER_SECRET_PREFIX):
        raise RuntimeError("JWT_SECRET must be set outside the dev platform.")


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the Chirpy Flask application.

    :param config: Config object or import path; ``APP_ENV`` decides when omitted.
    :param instance_relative_config: Also read ``instance/<instance_config_filename>``.
    :returns: A fully wired application.
    :raises RuntimeError: If ``JWT_SECRET`` is still the placeholder in production.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    _check_secrets(app)

    # Imported here so importing the package stays cheap for the CLI.
    from chirpy import cli
    from chirpy.api import init_app as init_api
    from chirpy.core import cors, errors, extensions, logger, metrics, proxy

    # Order matters: ProxyFix wraps the WSGI app before anything reads the
    # client address, and error handlers come after the blueprints.
    for init in (
        proxy.init_app,
        extensions.init_app,
        logger.init_app,
        cors.init_app,
        metrics.init_app,
        init_api,
        errors.init_app,
        cli.init_app,
    ):
        init(app)

    return app
