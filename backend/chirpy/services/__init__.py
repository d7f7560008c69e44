"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`chirpy.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``chirpy.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Session lifecycle (from ``chirpy.services.auth``)
    * :class:`SessionService`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`RevokeIn`,
      :class:`LoginOut`, :class:`AccessTokenOut`, :class:`AuthTokenConfig`

- Users (from ``chirpy.services.users``)
    * :class:`UserService`
    * DTOs: :class:`UserRegisterIn`, :class:`UserCredentialsUpdateIn`,
      :class:`UserPublicOut`

- Chirps (from ``chirpy.services.chirps``)
    * :class:`ChirpService`
    * DTOs: :class:`ChirpCreateIn`, :class:`ChirpListIn`, :class:`ChirpOut`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.dto import AccessTokenOut, AuthTokenConfig, LoginIn, LoginOut, RefreshIn, RevokeIn
from .auth.service import SessionService
from .chirps.dto import ChirpCreateIn, ChirpListIn, ChirpOut
from .chirps.service import ChirpService
from .users.dto import UserCredentialsUpdateIn, UserPublicOut, UserRegisterIn
from .users.service import UserService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Session lifecycle
    "SessionService",
    "LoginIn",
    "RefreshIn",
    "RevokeIn",
    "LoginOut",
    "AccessTokenOut",
    "AuthTokenConfig",
    # Users
    "UserService",
    "UserRegisterIn",
    "UserCredentialsUpdateIn",
    "UserPublicOut",
    # Chirps
    "ChirpService",
    "ChirpCreateIn",
    "ChirpListIn",
    "ChirpOut",
]
