"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResponseSchema, LoginSchema, TokenResponseSchema
from .chirp import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema
from .user import UserCredentialsSchema, UserSchema
from .webhook import USER_UPGRADED, WebhookDataSchema, WebhookEventSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "TokenResponseSchema",
    "ChirpSchema",
    "ChirpCreateSchema",
    "ChirpListQuerySchema",
    "UserSchema",
    "UserCredentialsSchema",
    "USER_UPGRADED",
    "WebhookDataSchema",
    "WebhookEventSchema",
]
