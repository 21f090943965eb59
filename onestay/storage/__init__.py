"""
Storage abstractions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from onestay.storage.base import (
    Collections,
    DuplicateKeyError,
    MetadataStorage,
)
from onestay.storage.local import InMemoryMetadataStorage, JsonFileMetadataStorage

if TYPE_CHECKING:
    from onestay.config import Settings


async def create_storage(settings: Settings) -> MetadataStorage:
    """Build the configured backend and declare its unique indexes."""
    if settings.storage_backend == "file":
        storage: MetadataStorage = JsonFileMetadataStorage(f"{settings.data_dir}/documents")
    else:
        storage = InMemoryMetadataStorage()

    await ensure_indexes(storage)
    return storage


async def ensure_indexes(storage: MetadataStorage) -> None:
    await storage.create_unique_index(Collections.ROLES, "slug")
    await storage.create_unique_index(Collections.USERS, "email")
    await storage.create_unique_index(Collections.PROPERTIES, "slug")
    await storage.create_unique_index(Collections.PROPERTIES, "host_id", "name")
    await storage.create_unique_index(Collections.LOGEMENTS, "user_id", "nom_bien")


__all__ = [
    "Collections",
    "DuplicateKeyError",
    "MetadataStorage",
    "InMemoryMetadataStorage",
    "JsonFileMetadataStorage",
    "create_storage",
    "ensure_indexes",
]
