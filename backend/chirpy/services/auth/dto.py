# chirpy/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from chirpy.services.users.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    :param expires_in_seconds: Optional requested access-token lifetime. Only
        shortens the default window; ``None`` or non-positive means default.
    :type expires_in_seconds: int | None
    """

    email: str
    password: str
    expires_in_seconds: int | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for minting a new access token.

    :param refresh_token: Opaque refresh token.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class RevokeIn:
    """
    Input DTO for revocation.

    :param refresh_token: Opaque refresh token to revoke.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param access_token: Signed access token.
    :param refresh_token: Opaque refresh token.
    :param user: Public profile of the authenticated user.
    """

    access_token: str
    refresh_token: str
    user: UserPublicOut


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """Output DTO carrying a freshly minted access token."""

    access_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param signing_secret: Shared HMAC secret for access tokens.
    :type signing_secret: str
    :param access_expires: Default and maximum access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Fixed refresh token lifetime.
    :type refresh_expires: timedelta
    """

    signing_secret: str
    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=60)
