"""
Storage abstraction layer.

All persistence goes through MetadataStorage, a small document-store
interface: collections of JSON documents keyed by id, with equality
filters, unique indexes and atomic counters. Repositories build on it;
nothing else touches storage directly.

Implementations (see local.py):
- InMemoryMetadataStorage: development and tests
- JsonFileMetadataStorage: single-process persistence to a data directory
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DuplicateKeyError(Exception):
    """A write would break a unique index."""

    def __init__(self, collection: str, fields: tuple[str, ...], values: tuple[Any, ...]):
        self.collection = collection
        self.fields = fields
        self.values = values
        super().__init__(f"Duplicate key in {collection}: {dict(zip(fields, values))}")


# =============================================================================
# Storage Interface
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured documents (roles, users, properties, ...).

    Every operation touches a single document or a single collection and
    is atomic on its own. There are no multi-document transactions.
    """

    @abstractmethod
    async def create_unique_index(self, collection: str, *fields: str) -> None:
        """
        Declare that the combination of `fields` is unique in `collection`.

        save() and update() raise DuplicateKeyError on violation.
        """
        pass

    @abstractmethod
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Insert or replace a document."""
        pass

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""
        pass

    @abstractmethod
    async def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """Get the first document matching all filters."""
        pass

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """Delete a document."""
        pass

    @abstractmethod
    async def delete_many(self, collection: str, filters: dict[str, Any]) -> int:
        """Delete every matching document, return how many were removed."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = 100,
        offset: int = 0,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Query documents with optional equality filters.

        `order_by` is a field name, prefixed with "-" for descending order.
        `limit=None` returns every match from `offset` on.
        """
        pass

    @abstractmethod
    async def count(self, collection: str, filters: dict[str, Any] | None = None) -> int:
        """Count matching documents."""
        pass

    @abstractmethod
    async def update(self, collection: str, id: str, updates: dict[str, Any]) -> bool:
        """Partial update of a document."""
        pass

    @abstractmethod
    async def increment(self, collection: str, id: str, field: str, amount: int = 1, floor: int = 0) -> int:
        """
        Atomically add `amount` to a counter field and return the new value.

        A missing document or field starts at `floor`. A stored value
        below `floor` is raised to it before incrementing.
        """
        pass

    async def exists(self, collection: str, filters: dict[str, Any]) -> bool:
        return await self.find_one(collection, filters) is not None

    async def close(self) -> None:
        """Release resources held by the backend."""
        return None


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection names."""

    ROLES = "roles"
    USERS = "users"
    PROPERTIES = "properties"
    LOGEMENTS = "logements"
    COUNTERS = "counters"
