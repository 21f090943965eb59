"""
Role management.

Built-in roles are seeded at startup and protected from deletion. Custom
roles take their id from a persisted sequence; creation is serialized so
that the slug check and the insert cannot interleave.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, Field

from onestay.auth.roles import BUILTIN_ROLES, is_reserved_role
from onestay.core.errors import BadRequest, DuplicateName, Forbidden, NotFound
from onestay.core.models import Role, ShortName
from onestay.core.slugs import normalize
from onestay.repositories import RoleRepository
from onestay.storage import DuplicateKeyError

logger = logging.getLogger(__name__)


class RoleCreate(BaseModel):
    name: ShortName
    slug: str | None = Field(default=None, max_length=100)


class RoleService:
    """Create, list, delete and seed roles."""

    def __init__(self, roles: RoleRepository):
        self.roles = roles
        self._create_lock = asyncio.Lock()

    async def list_roles(self) -> list[Role]:
        return await self.roles.list_all()

    async def create_role(self, data: RoleCreate) -> Role:
        slug = normalize(data.slug or data.name)
        if not slug:
            raise BadRequest("Role slug cannot be empty")

        async with self._create_lock:
            if await self.roles.find_by_slug(slug) is not None:
                raise DuplicateName(f"A role with slug '{slug}' already exists")

            role = Role(id=await self.roles.next_id(), name=data.name, slug=slug)
            try:
                await self.roles.insert(role)
            except DuplicateKeyError as e:
                raise DuplicateName(f"A role with slug '{slug}' already exists") from e

        logger.info("Created role %s (%s)", role.id, role.slug)
        return role

    async def delete_role(self, role_id: str) -> None:
        if is_reserved_role(role_id=role_id):
            raise Forbidden("Built-in roles cannot be deleted")

        role = await self.roles.find_by_id(role_id)
        if role is None:
            raise NotFound.for_resource("Role")
        if is_reserved_role(slug=role.slug):
            raise Forbidden("Built-in roles cannot be deleted")

        await self.roles.delete(role_id)
        logger.info("Deleted role %s (%s)", role.id, role.slug)

    # =========================================================================
    # Seeding
    # =========================================================================

    async def seed_builtin(self) -> int:
        """Insert any missing built-in role. Returns how many were created."""
        created = 0
        for role_id, name, slug in BUILTIN_ROLES:
            if await self.roles.exists(role_id):
                continue
            await self.roles.insert(Role(id=role_id, name=name, slug=slug))
            created += 1

        if created:
            logger.info("Seeded %d built-in roles", created)
        return created

    async def reset(self) -> int:
        """Delete every role, then seed the built-in ones again."""
        async with self._create_lock:
            removed = await self.roles.delete_all()
            logger.warning("Removed %d roles", removed)
            return await self.seed_builtin()
