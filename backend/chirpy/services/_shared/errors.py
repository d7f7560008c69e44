"""
Service-layer error taxonomy.

Nothing here knows about Flask or HTTP status codes. Services, repositories
and storage adapters raise these; :mod:`chirpy.core.errors` renders them as
problem+json after :func:`chirpy.services._shared.base.translate_service_error`
picks the API error.

Taxonomy
--------
- :class:`UnauthenticatedError` and its credential subclasses: the caller
  could not be identified. Always surfaces as a uniform 401.
- :class:`ForbiddenError`: identified but not entitled. 403.
- :class:`NotFoundError` / :class:`ConflictError`: users and chirps.
- :class:`TokenError` subclasses: internal verdicts of the token components.
  :class:`~chirpy.services.auth.service.SessionService` converts them into
  :class:`UnauthenticatedError` before they reach a caller.
- :class:`InfrastructureError` subclasses: storage/crypto failures; generic 500.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, marker: str) -> bool:
    """
    Tell whether ``exc`` was raised by the constraint identified by ``marker``.

    PostgreSQL reports the constraint name (``uq_users_email``); SQLite only
    reports ``table.column`` (``users.email``). Callers pass whichever they
    need, matched case-insensitively against the driver message.
    """
    return marker.lower() in str(exc.orig or "").lower()


class ServiceError(Exception):
    """Root of every error a service may raise on purpose."""


# --------------------------------------------------------------------------- #
# Resource errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    The requested user or chirp does not exist.

    :param entity: ``"User"``, ``"Chirp"`` or ``"RefreshToken"``.
    :param key: Lookup key. Never a secret; refresh tokens pass a placeholder.
    """

    entity: str
    key: str

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    A uniqueness rule was violated (email already registered).

    :param entity: Aggregate name.
    :param detail: Client-safe explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


class UnauthenticatedError(ServiceError):
    """The caller could not be authenticated. The reason is never exposed."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class MissingCredentialError(UnauthenticatedError):
    """No ``Authorization`` header was supplied."""

    def __init__(self, message: str = "Missing authorization header") -> None:
        super().__init__(message)


class MalformedCredentialError(UnauthenticatedError):
    """The ``Authorization`` header does not match the expected scheme/shape."""

    def __init__(self, message: str = "Malformed authorization header") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Authenticated, but not entitled to perform the operation."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class TokenError(ServiceError):
    """Base for token verdicts produced by the signer and the refresh store."""


class TokenExpiredError(TokenError):
    """Access token is past its ``exp`` claim."""


class TokenInvalidError(TokenError):
    """Access token failed signature or claim validation."""


class TokenRevokedOrExpiredError(TokenError):
    """Refresh token exists but is revoked or past ``expires_at``."""


# --------------------------------------------------------------------------- #
# Infrastructure
# --------------------------------------------------------------------------- #


class InfrastructureError(ServiceError):
    """Storage or crypto failure. Logged internally, generic to callers."""


class StorageError(InfrastructureError):
    """A persistence backend failed to read or write."""


class HashingError(InfrastructureError):
    """Password hashing failed or a stored hash is malformed."""


class SigningError(InfrastructureError):
    """An access token could not be serialized or signed."""
