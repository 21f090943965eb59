"""Role collection and the role id sequence."""

from __future__ import annotations

from onestay.auth.roles import ROLE_ID_FLOOR
from onestay.core.models import Role
from onestay.repositories.base import Repository
from onestay.storage import Collections

ROLE_SEQUENCE = "roles"


class RoleRepository(Repository[Role]):
    collection = Collections.ROLES
    model = Role

    async def find_by_slug(self, slug: str) -> Role | None:
        return await self.find_one(slug=slug)

    async def list_all(self) -> list[Role]:
        roles = await self.find_many(limit=None)
        return sorted(roles, key=lambda r: (len(r.id), r.id))

    async def exists(self, role_id: str) -> bool:
        return await self.storage.get(self.collection, role_id) is not None

    async def delete_all(self) -> int:
        return await self.storage.delete_many(self.collection, {})

    async def next_id(self) -> str:
        """
        Next custom role id from the persisted sequence.

        Never reuses an id, even after roles are deleted, and never goes
        below the highest built-in id.
        """
        value = await self.storage.increment(
            Collections.COUNTERS, ROLE_SEQUENCE, "value", floor=ROLE_ID_FLOOR
        )
        return str(value)
