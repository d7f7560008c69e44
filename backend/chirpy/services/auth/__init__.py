"""
Authentication and session lifecycle.

- :mod:`.passwords`: one-way password hashing.
- :mod:`.tokens`: signed, short-lived access tokens.
- :mod:`.refresh_tokens`: opaque, revocable refresh tokens.
- :mod:`.credentials`: ``Authorization`` header parsing.
- :mod:`.service`: login / refresh / revoke orchestration.
"""

from .credentials import Credential, CredentialExtractor, Scheme
from .dto import AccessTokenOut, AuthTokenConfig, LoginIn, LoginOut, RefreshIn, RevokeIn
from .passwords import PasswordHasher
from .refresh_tokens import RefreshTokenStore
from .service import SessionService
from .tokens import AccessClaims, TokenSigner

__all__ = [
    "AccessClaims",
    "AccessTokenOut",
    "AuthTokenConfig",
    "Credential",
    "CredentialExtractor",
    "LoginIn",
    "LoginOut",
    "PasswordHasher",
    "RefreshIn",
    "RefreshTokenStore",
    "RevokeIn",
    "Scheme",
    "SessionService",
    "TokenSigner",
]
