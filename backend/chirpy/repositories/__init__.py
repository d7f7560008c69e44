"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from chirpy.repositories.base import BaseRepository, apply_sorting, parse_sort_tokens
from chirpy.repositories.chirp import ChirpRepository
from chirpy.repositories.refresh_token import RefreshTokenRepository
from chirpy.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "apply_sorting",
    "parse_sort_tokens",
    "ChirpRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
