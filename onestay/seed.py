"""
Seeding - built-in roles and the first super-admin.

Run at every startup (idempotent) and from the CLI:

    onestay seed-roles
    onestay reset-roles
    onestay create-superadmin --email admin@example.com --password ...
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from onestay.auth.roles import ROLE_ID_SUPER_ADMIN
from onestay.config import Settings
from onestay.core.models import User
from onestay.services import Services
from onestay.storage import create_storage

logger = logging.getLogger(__name__)


async def bootstrap(services: Services, settings: Settings) -> None:
    """Seed missing built-in roles, and the configured super-admin if any."""
    await services.roles.seed_builtin()

    if settings.superadmin_email and settings.superadmin_password:
        user, created = await services.users.ensure_user(
            settings.superadmin_email,
            settings.superadmin_password,
            role_id=ROLE_ID_SUPER_ADMIN,
        )
        if created:
            logger.info("Created super-admin %s", user.id)


@asynccontextmanager
async def open_services(settings: Settings) -> AsyncIterator[Services]:
    """Storage and services for one-off commands."""
    if settings.storage_backend == "memory":
        logger.warning("STORAGE_BACKEND=memory: changes are lost when this command exits")

    storage = await create_storage(settings)
    try:
        yield Services.build(storage, settings)
    finally:
        await storage.close()


async def seed_roles(settings: Settings) -> int:
    async with open_services(settings) as services:
        return await services.roles.seed_builtin()


async def reset_roles(settings: Settings) -> int:
    """Delete every role (custom ones included), then seed the built-in ones."""
    async with open_services(settings) as services:
        return await services.roles.reset()


async def create_superadmin(
    settings: Settings,
    email: str,
    password: str,
    first_name: str = "Super",
    last_name: str = "Admin",
) -> tuple[User, bool]:
    async with open_services(settings) as services:
        await services.roles.seed_builtin()
        return await services.users.ensure_user(
            email,
            password,
            role_id=ROLE_ID_SUPER_ADMIN,
            first_name=first_name,
            last_name=last_name,
        )
