"""
Abstract Unit of Work contract shared by the services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chirpy.repositories import ChirpRepository, RefreshTokenRepository, UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one service call.

    Every repository attribute is bound to the same session, so a user lookup
    and a refresh token write inside one scope commit (or roll back) together.
    """

    users: UserRepository
    refresh_tokens: RefreshTokenRepository
    chirps: ChirpRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
