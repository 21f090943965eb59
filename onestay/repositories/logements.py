"""Legacy logement collection."""

from __future__ import annotations

from onestay.core.models import ListingStatus, Logement
from onestay.repositories.base import Repository
from onestay.storage import Collections


class LogementRepository(Repository[Logement]):
    collection = Collections.LOGEMENTS
    model = Logement

    async def name_taken(self, user_id: str, nom_bien: str) -> bool:
        return await self.storage.exists(self.collection, {"user_id": user_id, "nom_bien": nom_bien})

    async def find_by_owner(self, owner_id: str, include_draft: bool = False) -> list[Logement]:
        filters: dict = {"user_id": owner_id}
        if not include_draft:
            filters["status"] = int(ListingStatus.PUBLISHED)
        return await self.find_many(filters, limit=None, order_by="-created_at")

    async def delete_by_owner(self, owner_id: str) -> int:
        return await self.storage.delete_many(self.collection, {"user_id": owner_id})
