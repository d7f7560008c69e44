# chirpy/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import (
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    StorageError,
    TokenError,
    UnauthenticatedError,
)
from chirpy.services.auth.dto import (
    AccessTokenOut,
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    RefreshIn,
    RevokeIn,
)
from chirpy.services.auth.passwords import PasswordHasher
from chirpy.services.auth.refresh_tokens import RefreshTokenStore
from chirpy.services.auth.tokens import TokenSigner
from chirpy.services.users.dto import UserPublicOut

log = logging.getLogger(__name__)


class SessionService(BaseService):
    """
    Session lifecycle service (login / refresh / revoke / authenticate).

    Issues access tokens through :class:`TokenSigner`, keeps refresh tokens in a
    :class:`RefreshTokenStore`, and verifies passwords with
    :class:`PasswordHasher`. This is the boundary where internal verdicts
    (token expired, token unknown, password mismatch...) collapse into a single
    :class:`UnauthenticatedError`. Infrastructure errors are logged and
    re-raised untouched as the generic failure category.
    """

    def __init__(
        self,
        *,
        refresh_store: RefreshTokenStore,
        token_cfg: AuthTokenConfig,
        signer: TokenSigner | None = None,
        hasher: PasswordHasher | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param refresh_store: Stateful store for refresh tokens.
        :param token_cfg: Signing secret and token lifetimes.
        :param signer: Access token signer (stateless).
        :param hasher: Password hasher.
        """
        super().__init__(ctx=ctx)
        self.refresh_store = refresh_store
        self.cfg = token_cfg
        self.signer = signer or TokenSigner()
        self.hasher = hasher or PasswordHasher()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue an access/refresh token pair.

        :param dto: Login input.
        :returns: Both tokens plus the public user profile.
        :raises UnauthenticatedError: Unknown email or wrong password
            (indistinguishable on purpose).
        """
        try:
            with self.ro_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get_by_email(dto.email)
                if user is None:
                    log.info("auth.login.failed", extra={"event": "unknown_email"})
                    raise UnauthenticatedError()
                try:
                    matches = self.hasher.verify(dto.password, user.hashed_password)
                except InfrastructureError:
                    log.exception("auth.login.hash_error", extra={"user_id": str(user.id)})
                    raise
                if not matches:
                    log.info("auth.login.failed", extra={"user_id": str(user.id)})
                    raise UnauthenticatedError()
                profile = UserPublicOut.from_model(user)
        except SQLAlchemyError as exc:
            log.exception("auth.infrastructure_error", extra={"event": "lookup"})
            raise StorageError("Could not load user for login") from exc

        access = self._mint_access(profile.id, self._access_ttl(dto.expires_in_seconds))
        refresh = self._guard(lambda: self.refresh_store.issue(profile.id), "issue")
        log.info("auth.login.succeeded", extra={"user_id": str(profile.id)})
        return LoginOut(access_token=access, refresh_token=refresh, user=profile)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Exchange a usable refresh token for a new default-lifetime access token.

        The refresh token itself is neither rotated nor extended.

        :raises UnauthenticatedError: Unknown, revoked or expired refresh token.
        """
        try:
            owner = self._guard(lambda: self.refresh_store.resolve_owner(dto.refresh_token), "resolve")
            self._guard(lambda: self.refresh_store.check_usable(dto.refresh_token), "check")
        except (NotFoundError, TokenError) as exc:
            log.info("auth.refresh.rejected", extra={"event": type(exc).__name__})
            raise UnauthenticatedError() from exc

        access = self._mint_access(owner, self.cfg.access_expires)
        return AccessTokenOut(access_token=access)

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, dto: RevokeIn) -> None:
        """
        Revoke a refresh token.

        Unknown tokens are treated as already revoked so the response never
        reveals whether a token exists.
        """
        try:
            self._guard(lambda: self.refresh_store.revoke(dto.refresh_token), "revoke")
        except NotFoundError:
            log.info("auth.revoke.unknown_token")
            return
        log.info("auth.revoke.succeeded")

    # ------------------------------------------------------------------ #
    # Authentication / authorization
    # ------------------------------------------------------------------ #

    def authenticate(self, access_token: str, secret: str | None = None) -> UUID:
        """
        Verify an access token and return the caller's user id.

        Every protected operation calls this before doing anything else. A
        deleted user's token stays valid until it expires; no user lookup
        happens here.

        :param access_token: Token taken from ``Authorization: Bearer``.
        :param secret: Signing secret; defaults to the configured one.
        :raises UnauthenticatedError: Expired or invalid token.
        """
        try:
            user_id = self.signer.verify(access_token, secret or self.cfg.signing_secret)
        except TokenError as exc:
            log.info("auth.authenticate.rejected", extra={"event": type(exc).__name__})
            raise UnauthenticatedError() from exc
        self.ctx.actor_id = user_id
        return user_id

    @staticmethod
    def authorize_ownership(resource_owner_id: UUID, requesting_user_id: UUID) -> bool:
        """Return ``True`` only when the requester owns the resource."""
        return resource_owner_id == requesting_user_id

    def ensure_owner(self, resource_owner_id: UUID, requesting_user_id: UUID) -> None:
        """
        Raise :class:`ForbiddenError` unless the requester owns the resource.

        Callers must have confirmed the resource exists; a mismatch is a 403,
        never a 404.
        """
        if not self.authorize_ownership(resource_owner_id, requesting_user_id):
            log.info("auth.ownership.denied", extra={"user_id": str(requesting_user_id)})
            raise ForbiddenError("You can only modify your own resources.")

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _access_ttl(self, requested_seconds: int | None) -> timedelta:
        """The caller may shorten the default window, never lengthen it."""
        default = self.cfg.access_expires
        if requested_seconds is None or requested_seconds <= 0:
            return default
        # Compare before building a timedelta; huge values overflow it.
        if requested_seconds >= default.total_seconds():
            return default
        return timedelta(seconds=requested_seconds)

    def _mint_access(self, user_id: UUID, ttl: timedelta) -> str:
        return self._guard(
            lambda: self.signer.issue(user_id, self.cfg.signing_secret, ttl), "sign"
        )

    @staticmethod
    def _guard(op, what: str):
        """Run ``op``; log infrastructure failures with traceback and re-raise."""
        try:
            return op()
        except InfrastructureError:
            log.exception("auth.infrastructure_error", extra={"event": what})
            raise
