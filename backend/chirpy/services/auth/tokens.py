"""Signed, time-bounded access tokens (HS256 JWT via PyJWT)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from chirpy.services._shared.errors import (
    SigningError,
    TokenExpiredError,
    TokenInvalidError,
)

ISSUER = "chirpy"
ALGORITHM = "HS256"
CLAIM_NAMES = frozenset({"iss", "sub", "iat", "exp"})


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    The complete claim set of an access token.

    :ivar iss: Issuer, always :data:`ISSUER`.
    :ivar sub: Subject user id (UUID string).
    :ivar iat: Issued-at, seconds since epoch.
    :ivar exp: Expiry, seconds since epoch.
    """

    iss: str
    sub: str
    iat: int
    exp: int

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AccessClaims:
        """Build claims from a decoded payload, rejecting missing or unknown keys."""
        keys = set(payload)
        if keys != CLAIM_NAMES:
            raise TokenInvalidError(
                f"Unexpected claim set: missing={sorted(CLAIM_NAMES - keys)} "
                f"unknown={sorted(keys - CLAIM_NAMES)}"
            )
        if not isinstance(payload["sub"], str):
            raise TokenInvalidError("Subject claim must be a string")
        if not all(isinstance(payload[k], int) for k in ("iat", "exp")):
            raise TokenInvalidError("Time claims must be integers")
        return cls(
            iss=payload["iss"], sub=payload["sub"], iat=payload["iat"], exp=payload["exp"]
        )

    def subject_id(self) -> UUID:
        try:
            return UUID(self.sub)
        except ValueError as exc:
            raise TokenInvalidError("Subject is not a valid user id") from exc


class TokenSigner:
    """
    Stateless issuer/verifier of access tokens.

    Verification always recomputes the HMAC with the shared secret handed in by
    the caller; nothing is cached between calls.
    """

    def issue(self, subject_id: UUID, secret: str, ttl: timedelta) -> str:
        """
        Sign a new access token for ``subject_id`` valid for ``ttl``.

        A negative ``ttl`` yields an already-expired token.

        :raises SigningError: If the claims cannot be serialized or signed.
        """
        now = datetime.now(UTC)
        claims = AccessClaims(
            iss=ISSUER,
            sub=str(subject_id),
            iat=int(now.timestamp()),
            exp=int((now + ttl).timestamp()),
        )
        try:
            return jwt.encode(asdict(claims), secret, algorithm=ALGORITHM)
        except (TypeError, ValueError, jwt.PyJWTError) as exc:
            raise SigningError("Access token signing failed") from exc

    def verify(self, token: str, secret: str) -> UUID:
        """
        Check signature, issuer and expiry, then return the subject user id.

        :raises TokenExpiredError: When ``now >= exp``.
        :raises TokenInvalidError: On a bad signature, malformed or unexpected
            claims, or a subject that is not a UUID.
        """
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                issuer=ISSUER,
                options={"require": sorted(CLAIM_NAMES)},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Access token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError("Access token rejected") from exc
        return AccessClaims.from_payload(payload).subject_id()
