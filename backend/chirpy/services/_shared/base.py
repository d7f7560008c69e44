# chirpy/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from chirpy.core import errors as api_errors
from chirpy.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    ServiceError,
    TokenError,
    UnauthenticatedError,
)
from chirpy.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data a service may log or act on.

    :param actor_id: User id proven by the access token, once authenticated.
    :param request_id: Correlation id echoed in ``X-Request-ID``.
    """

    actor_id: UUID | None = None
    request_id: str | None = None


# Checked in order; the first matching base class wins.
_TRANSLATIONS: tuple[tuple[type[ServiceError], type[api_errors.APIError], bool], ...] = (
    # (service error, api error, forward the message?)
    (UnauthenticatedError, api_errors.Unauthorized, False),
    (TokenError, api_errors.Unauthorized, False),
    (ForbiddenError, api_errors.Forbidden, True),
    (NotFoundError, api_errors.NotFound, True),
    (ConflictError, api_errors.Conflict, True),
    (InfrastructureError, api_errors.InternalError, False),
)


def translate_service_error(exc: ServiceError) -> api_errors.APIError:
    """
    Map a service-layer error to the API error that renders it.

    Every credential failure, whatever its cause, becomes the same bare 401,
    and infrastructure failures become a bare 500; neither forwards the
    internal message.

    :param exc: Error raised by a service.
    :returns: API error ready for :mod:`chirpy.core.errors`.
    """
    for service_type, api_type, forward in _TRANSLATIONS:
        if isinstance(exc, service_type):
            return api_type(str(exc)) if forward else api_type()
    return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")


class BaseService:
    """
    Base class for application services.

    Services own transactions: every method opens exactly one Unit of Work,
    read-write for mutations and read-only for lookups. They never touch
    Flask request objects.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Open a read-only Unit of Work.

        :param isolation: Isolation level; ``READ COMMITTED`` by default.
        :param enforce_db_readonly: Ask the database for ``READ ONLY`` where supported.
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )
