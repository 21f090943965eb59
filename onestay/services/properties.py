"""
Property listings.

A property is created as a draft owned by its host, gets a slug allocated
from its name, and becomes visible to everyone once published. Drafts are
only ever shown to their host; to anyone else they do not exist.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from onestay.auth.context import AuthContext
from onestay.auth.gate import ensure_owner
from onestay.core.errors import DuplicateName, NotFound, SlugAllocationError
from onestay.core.models import ListingName, ListingStatus, Property, PropertyDetails, RequiredText
from onestay.core.sections import (
    BabyKids,
    CamelModel,
    CheckInOut,
    Contacts,
    Emergency,
    Entertainment,
    Equipment,
    Instructions,
    LocalRecommendations,
    Neighborhood,
    Outdoor,
    Parking,
    Pets,
    Rules,
    Security,
    Services,
    Transport,
    Wifi,
)
from onestay.core.slugs import SlugAllocator
from onestay.core.utils import utc_now
from onestay.repositories import PropertyRepository
from onestay.storage import DuplicateKeyError

logger = logging.getLogger(__name__)

# Fresh allocations after the storage rejects a slug another request took
MAX_SLUG_RETRIES = 3

SLUG_INDEX = ("slug",)


# =============================================================================
# Input Models
# =============================================================================


class PropertyCreate(PropertyDetails):
    name: ListingName
    address: RequiredText
    city: RequiredText
    country: RequiredText


class PropertyUpdate(CamelModel):
    """Partial update: only the fields sent are changed."""

    name: ListingName | None = None
    address: RequiredText | None = None
    city: RequiredText | None = None
    country: RequiredText | None = None
    description: str | None = None
    zip_code: str | None = None
    images: list[str] | None = None

    check_in_out: CheckInOut | None = None
    wifi: Wifi | None = None
    equipment: Equipment | None = None
    instructions: Instructions | None = None
    rules: Rules | None = None
    contacts: Contacts | None = None
    local_recommendations: LocalRecommendations | None = None
    parking: Parking | None = None
    transport: Transport | None = None
    security: Security | None = None
    services: Services | None = None
    baby_kids: BabyKids | None = None
    pets: Pets | None = None
    entertainment: Entertainment | None = None
    outdoor: Outdoor | None = None
    neighborhood: Neighborhood | None = None
    emergency: Emergency | None = None


# =============================================================================
# Service
# =============================================================================


class PropertyService:
    def __init__(self, properties: PropertyRepository, allocator: SlugAllocator):
        self.properties = properties
        self.allocator = allocator

    async def _with_slug_retry(self, write: Callable[[], Awaitable[Any]]) -> Any:
        """
        Run a write that allocates a slug, allocating again if another
        request stored the same slug between probe and write.
        """
        for attempt in range(MAX_SLUG_RETRIES + 1):
            try:
                return await write()
            except DuplicateKeyError as e:
                if e.fields != SLUG_INDEX:
                    raise DuplicateName("You already have a property with this name") from e
                logger.warning("Slug %s taken concurrently (attempt %d)", e.values[0], attempt + 1)

        raise SlugAllocationError("Slug kept colliding with concurrent writes")

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_visible(self, id_or_slug: str, ctx: AuthContext) -> Property:
        """Fetch a property; a draft is NotFound unless the caller is its host."""
        prop = await self.properties.find_by_identifier(id_or_slug)
        if prop is None or (prop.is_draft and not ctx.owns(prop.host_id)):
            raise NotFound.for_resource("Property")
        return prop

    async def list_published(self, limit: int = 20, skip: int = 0) -> list[Property]:
        return await self.properties.find_published(limit=limit, skip=skip)

    async def list_by_owner(self, owner_id: str, ctx: AuthContext) -> list[Property]:
        return await self.properties.find_by_owner(owner_id, include_draft=ctx.owns(owner_id))

    async def _get_owned(self, id_or_slug: str, ctx: AuthContext) -> Property:
        prop = await self.properties.find_by_identifier(id_or_slug)
        if prop is None:
            raise NotFound.for_resource("Property")
        ensure_owner(ctx, prop.host_id)
        return prop

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, host_id: str, data: PropertyCreate) -> Property:
        if await self.properties.name_taken(host_id, data.name):
            raise DuplicateName("You already have a property with this name")

        details = data.model_dump(exclude={"name"})

        async def write() -> Property:
            slug = await self.allocator.allocate(data.name, self.properties.exists_by_slug)
            prop = Property(**details, name=data.name, host_id=host_id, slug=slug)
            return await self.properties.insert(prop)

        prop = await self._with_slug_retry(write)
        logger.info("Host %s created property %s (%s)", host_id, prop.id, prop.slug)
        return prop

    async def update(self, id_or_slug: str, ctx: AuthContext, data: PropertyUpdate) -> Property:
        prop = await self._get_owned(id_or_slug, ctx)

        changes = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            return prop

        if "name" in changes:
            if await self.properties.name_taken(prop.host_id, changes["name"], exclude_id=prop.id):
                raise DuplicateName("You already have a property with this name")

        changes["updated_at"] = utc_now().isoformat()

        async def write() -> None:
            if "name" in changes and changes["name"] != prop.name:
                changes["slug"] = await self.allocator.reallocate(
                    changes["name"], self.properties.exists_by_slug, prop.slug
                )
            await self.properties.update(prop.id, changes)

        await self._with_slug_retry(write)
        logger.info("Updated property %s (%s)", prop.id, ", ".join(sorted(changes)))
        return await self.properties.find_by_id(prop.id)

    async def publish(self, id_or_slug: str, ctx: AuthContext) -> Property:
        prop = await self._get_owned(id_or_slug, ctx)

        now = utc_now().isoformat()
        await self.properties.update(prop.id, {
            "status": int(ListingStatus.PUBLISHED),
            "published_at": now,
            "updated_at": now,
        })
        logger.info("Published property %s", prop.id)
        return await self.properties.find_by_id(prop.id)

    async def delete(self, id_or_slug: str, ctx: AuthContext) -> None:
        prop = await self._get_owned(id_or_slug, ctx)
        await self.properties.delete(prop.id)
        logger.info("Deleted property %s", prop.id)
