"""Legacy logement listings."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from onestay.auth.context import AuthContext
from onestay.core.errors import DuplicateName
from onestay.core.models import ListingName, Logement, RequiredText
from onestay.repositories import LogementRepository
from onestay.storage import DuplicateKeyError

logger = logging.getLogger(__name__)


class LogementCreate(BaseModel):
    nom_bien: ListingName
    description: str = ""
    adresse: RequiredText
    ville: RequiredText
    pays: RequiredText


class LogementService:
    def __init__(self, logements: LogementRepository):
        self.logements = logements

    async def create(self, owner_id: str, data: LogementCreate) -> Logement:
        if await self.logements.name_taken(owner_id, data.nom_bien):
            raise DuplicateName("You already have a logement with this name")

        logement = Logement(**data.model_dump(), user_id=owner_id)
        try:
            await self.logements.insert(logement)
        except DuplicateKeyError as e:
            raise DuplicateName("You already have a logement with this name") from e

        logger.info("User %s created logement %s", owner_id, logement.id)
        return logement

    async def list_by_owner(self, owner_id: str, ctx: AuthContext) -> list[Logement]:
        return await self.logements.find_by_owner(owner_id, include_draft=ctx.owns(owner_id))
