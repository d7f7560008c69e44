"""
ChirpService
============

Create, list, fetch and delete chirps. Deletion is owner-only: the chirp must
exist (404) before ownership is checked (403).
"""

from __future__ import annotations

import logging
from uuid import UUID

from chirpy.repositories.chirp import ChirpRepository
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import ForbiddenError, NotFoundError
from chirpy.services.auth.service import SessionService
from chirpy.services.chirps.dto import ChirpCreateIn, ChirpListIn, ChirpOut

log = logging.getLogger(__name__)


class ChirpService(BaseService):
    """Application service for the ``Chirp`` aggregate."""

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)

    def create(self, dto: ChirpCreateIn) -> ChirpOut:
        """
        Persist a chirp for the authenticated author.

        :param dto: Author id and body.
        :returns: The stored chirp.
        """
        with self.rw_uow() as uow:
            repo: ChirpRepository = uow.chirps
            chirp = repo.add(repo.model(body=dto.body, user_id=dto.user_id))
            out = ChirpOut.from_model(chirp)
        log.info("chirp.created", extra={"user_id": str(dto.user_id)})
        return out

    def list(self, dto: ChirpListIn) -> list[ChirpOut]:
        with self.ro_uow() as uow:
            rows = uow.chirps.list_chirps(author_id=dto.author_id, descending=dto.descending)
            return [ChirpOut.from_model(c) for c in rows]

    def get(self, chirp_id: UUID) -> ChirpOut:
        """
        :raises NotFoundError: If no chirp has this id.
        """
        with self.ro_uow() as uow:
            chirp = uow.chirps.get(chirp_id)
            if chirp is None:
                raise NotFoundError("Chirp", str(chirp_id))
            return ChirpOut.from_model(chirp)

    def delete(self, chirp_id: UUID, requesting_user_id: UUID) -> None:
        """
        Delete a chirp owned by the requester.

        :raises NotFoundError: If no chirp has this id.
        :raises ForbiddenError: If the requester is not the author.
        """
        with self.rw_uow() as uow:
            repo: ChirpRepository = uow.chirps
            chirp = repo.get(chirp_id)
            if chirp is None:
                raise NotFoundError("Chirp", str(chirp_id))
            if not SessionService.authorize_ownership(chirp.user_id, requesting_user_id):
                log.info("chirp.delete.forbidden", extra={"user_id": str(requesting_user_id)})
                raise ForbiddenError("You can only delete your own chirps.")
            repo.delete(chirp)
        log.info("chirp.deleted", extra={"user_id": str(requesting_user_id)})
