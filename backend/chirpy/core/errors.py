"""RFC 7807 problem+json rendering for every error the app can raise."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from chirpy.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine codes per status; anything unlisted is "error".
STATUS_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    429: "too_many_requests",
    500: "internal_server_error",
    503: "service_unavailable",
}


def problem_response(
    status: int, message: str, *, code: str | None = None, details: dict[str, Any] | None = None
) -> tuple[Response, int]:
    """
    Build a ``(response, status)`` pair carrying a Problem Details body.

    :param status: HTTP status code.
    :param message: Client-safe ``detail``.
    :param code: Machine code; derived from ``status`` when omitted.
    :param details: Optional structured payload (validation messages).
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path,
        "code": code or STATUS_CODES.get(status, "error"),
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, status


class APIError(Exception):
    """
    An error that already knows its HTTP rendering.

    Parameters
    ----------
    message : str
        ``detail`` shown to clients.
    status_code : int, optional
        HTTP status, ``400`` by default.
    code : str, optional
        Machine-readable identifier.
    details : dict[str, Any] | None, optional
        Structured extras included under ``details``.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = int(status_code)
        if code is not None:
            self.code = code
        self.details = details or {}


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    code = "conflict"

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


class Unauthorized(APIError):
    """401. The message never varies by cause."""

    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(APIError):
    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class InternalError(APIError):
    """500 for infrastructure failures; internals stay in the logs."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal_server_error"

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(message)


def _render(err: APIError) -> tuple[Response, int]:
    level = log.error if err.status_code >= 500 else log.warning
    level("api_error code=%s status=%s detail=%s", err.code, err.status_code, err.message)
    return problem_response(
        err.status_code, err.message, code=err.code, details=err.details or None
    )


def init_app(app: Flask) -> None:
    """
    Register problem+json handlers on ``app``.

    Service errors go through
    :func:`chirpy.services._shared.base.translate_service_error`; anything
    unexpected becomes a generic 500 with the traceback logged.
    """
    from chirpy.services._shared.base import translate_service_error
    from chirpy.services._shared.errors import InfrastructureError, ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _render(err)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        if isinstance(err, InfrastructureError):
            log.error("infrastructure_error kind=%s", type(err).__name__, exc_info=err)
        return _render(translate_service_error(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        log.warning("http_error status=%s detail=%s", status, message)
        return problem_response(status, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("validation_error fields=%s", sorted(err.normalized_messages()))
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            code="validation_error",
            details={"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("integrity_error", exc_info=err)
        return problem_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("operational_error", exc_info=err)
        return problem_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled_exception", exc_info=err)
        return problem_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
