"""Environment-driven settings classes, selected by ``APP_ENV``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production

# A missing .env is fine; real deployments export variables directly.
load_dotenv()

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1/true/yes/y/on`` (any case) mean ``True``."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, falling back to ``default`` when unset or blank."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    JWT_SECRET: str
        HMAC secret for access tokens. The factory refuses the placeholder
        outside the ``dev`` platform.
    POLKA_KEY: str
        Key the billing webhook presents as ``Authorization: ApiKey <key>``.
        Empty means every webhook call is rejected.
    PLATFORM: str
        ``"dev"`` unlocks ``POST /admin/reset`` and ``flask maintenance fresh``.
    ACCESS_TOKEN_TTL_SECONDS: int
        Default and maximum access token lifetime (3600).
    REFRESH_TOKEN_TTL_DAYS: int
        Refresh token lifetime fixed at issuance (60).
    REDIS_URL: str | None
        When set, refresh tokens live in Redis instead of ``refresh_tokens``.
    FILESERVER_ROOT: str
        Directory served under ``/app``.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to ``POST /api/login``.
    USE_PROXYFIX: bool
        Honour ``X-Forwarded-*`` from ``PROXY_HOPS`` reverse proxies.
    """

    API_BASE_PREFIX = "/api"

    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_JWT_SECRET_AT_LEAST_32_BYTES")
    POLKA_KEY = os.getenv("POLKA_KEY", "")
    PLATFORM = os.getenv("PLATFORM", "production")

    # Session lifetimes
    ACCESS_TOKEN_TTL_SECONDS = env_int("ACCESS_TOKEN_TTL_SECONDS", 3600)
    REFRESH_TOKEN_TTL_DAYS = env_int("REFRESH_TOKEN_TTL_DAYS", 60)

    # Storage
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./chirpy.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = os.getenv("REDIS_URL") or None

    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", ".")

    # Login throttling
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # HTTP edge
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = 600
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on and ``PLATFORM=dev`` unless overridden."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    PLATFORM = os.getenv("PLATFORM", "dev")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", False)


class TestingConfig(BaseConfig):
    """Test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` is set, no Redis, and no
    login throttling so suites can log in repeatedly.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PROPAGATE_EXCEPTIONS = True
    RATELIMIT_ENABLED = False
    REDIS_URL = None


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
