"""Property collection."""

from __future__ import annotations

from onestay.core.models import ListingStatus, Property
from onestay.repositories.base import Repository
from onestay.storage import Collections

class PropertyRepository(Repository[Property]):
    collection = Collections.PROPERTIES
    model = Property

    async def exists_by_slug(self, slug: str) -> bool:
        return await self.storage.exists(self.collection, {"slug": slug})

    async def find_by_slug(self, slug: str) -> Property | None:
        return await self.find_one(slug=slug)

    async def find_by_identifier(self, id_or_slug: str) -> Property | None:
        """Look up by id first, then by slug."""
        found = await self.find_by_id(id_or_slug)
        if found is None:
            found = await self.find_by_slug(id_or_slug)
        return found

    async def name_taken(self, host_id: str, name: str, exclude_id: str | None = None) -> bool:
        existing = await self.find_one(host_id=host_id, name=name)
        return existing is not None and existing.id != exclude_id

    async def find_by_owner(self, owner_id: str, include_draft: bool = False) -> list[Property]:
        filters: dict = {"host_id": owner_id}
        if not include_draft:
            filters["status"] = int(ListingStatus.PUBLISHED)
        return await self.find_many(filters, limit=None, order_by="-created_at")

    async def find_published(self, limit: int = 20, skip: int = 0) -> list[Property]:
        """Published properties, newest first."""
        return await self.find_many(
            {"status": int(ListingStatus.PUBLISHED)},
            limit=limit,
            offset=skip,
            order_by="-created_at",
        )

    async def delete_by_host(self, host_id: str) -> int:
        return await self.storage.delete_many(self.collection, {"host_id": host_id})
