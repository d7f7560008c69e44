"""Shared API helpers for authentication, service wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import hmac
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar, cast
from uuid import UUID

from flask import Response, current_app, g, jsonify, request

from chirpy.core.errors import Unauthorized
from chirpy.core.extensions import REDIS_EXTENSION_KEY
from chirpy.core.logger import ensure_request_id
from chirpy.infra.redis import RedisRefreshTokenBackend
from chirpy.infra.sql import SQLAlchemyRefreshTokenBackend
from chirpy.services._shared.base import ServiceContext
from chirpy.services._shared.errors import UnauthenticatedError
from chirpy.services._shared.ports import RefreshTokenBackend
from chirpy.services.auth.credentials import CredentialExtractor
from chirpy.services.auth.dto import AuthTokenConfig
from chirpy.services.auth.refresh_tokens import RefreshTokenStore
from chirpy.services.auth.service import SessionService

F = TypeVar("F", bound=Callable[..., Any])

BACKEND_EXTENSION_KEY = "refresh_token_backend"

extractor = CredentialExtractor()


# ------------------------------ Service wiring ------------------------------


def get_refresh_backend() -> RefreshTokenBackend:
    """Return the app's refresh token backend, choosing it on first use.

    Redis is used when a client was configured through ``REDIS_URL``; the
    database otherwise.
    """
    backend = current_app.extensions.get(BACKEND_EXTENSION_KEY)
    if backend is None:
        redis_client = current_app.extensions.get(REDIS_EXTENSION_KEY)
        if redis_client is not None:
            backend = RedisRefreshTokenBackend(redis_client)
        else:
            backend = SQLAlchemyRefreshTokenBackend()
        current_app.extensions[BACKEND_EXTENSION_KEY] = backend
    return cast(RefreshTokenBackend, backend)


def token_config() -> AuthTokenConfig:
    cfg = current_app.config
    return AuthTokenConfig(
        signing_secret=cfg["JWT_SECRET"],
        access_expires=timedelta(seconds=int(cfg["ACCESS_TOKEN_TTL_SECONDS"])),
        refresh_expires=timedelta(days=int(cfg["REFRESH_TOKEN_TTL_DAYS"])),
    )


def service_context() -> ServiceContext:
    return ServiceContext(actor_id=getattr(g, "user_id", None), request_id=ensure_request_id())


def get_session_service() -> SessionService:
    """Build a request-scoped :class:`SessionService` from app configuration."""
    cfg = token_config()
    store = RefreshTokenStore(get_refresh_backend(), ttl=cfg.refresh_expires)
    return SessionService(refresh_store=store, token_cfg=cfg, ctx=service_context())


# ------------------------------ Authentication ------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid bearer access token.

    The authenticated user id is exposed as ``g.user_id``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = extractor.bearer_token(request.headers)
        g.user_id = get_session_service().authenticate(token)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_api_key(config_key: str) -> Callable[[F], F]:
    """Ensure ``Authorization: ApiKey <key>`` matches ``app.config[config_key]``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            presented = extractor.api_key(request.headers)
            expected = str(current_app.config.get(config_key) or "")
            if not expected or not hmac.compare_digest(presented.encode(), expected.encode()):
                raise UnauthenticatedError()
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_user_id() -> UUID:
    """Return the id set by :func:`require_auth`."""
    user_id = getattr(g, "user_id", None)
    if user_id is None:
        raise Unauthorized()
    return cast(UUID, user_id)


# ------------------------------ Responses -----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(status: int = 204) -> Response:
    return Response(status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
