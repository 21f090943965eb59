"""
Local storage implementations.

In-memory and JSON-file document stores that work without any external
service. Writes are serialized by an asyncio lock; unique indexes are
checked inside that lock, so two concurrent inserts of the same key see
one success and one DuplicateKeyError.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from onestay.storage.base import DuplicateKeyError, MetadataStorage

logger = logging.getLogger(__name__)


def _matches(doc: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(doc.get(key) == value for key, value in filters.items())


def _sort_key(field: str):
    # None sorts first ascending, last descending
    def key(doc: dict[str, Any]):
        value = doc.get(field)
        return (value is not None, value)
    return key


# =============================================================================
# In-Memory Metadata Storage
# =============================================================================


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory document storage for development and tests."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._unique: dict[str, list[tuple[str, ...]]] = {}
        self._lock = asyncio.Lock()

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._data.setdefault(collection, {})

    def _check_unique(self, collection: str, id: str, doc: dict[str, Any]) -> None:
        for fields in self._unique.get(collection, []):
            values = tuple(doc.get(f) for f in fields)
            if any(v is None for v in values):
                continue
            for other_id, other in self._collection(collection).items():
                if other_id == id:
                    continue
                if tuple(other.get(f) for f in fields) == values:
                    raise DuplicateKeyError(collection, fields, values)

    async def _persist(self, collection: str) -> None:
        """Hook for subclasses that write collections somewhere durable."""
        return None

    async def create_unique_index(self, collection: str, *fields: str) -> None:
        if not fields:
            raise ValueError("A unique index needs at least one field")
        indexes = self._unique.setdefault(collection, [])
        if fields not in indexes:
            indexes.append(tuple(fields))

    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        doc = {**copy.deepcopy(data), "id": id}
        async with self._lock:
            self._check_unique(collection, id, doc)
            self._collection(collection)[id] = doc
            await self._persist(collection)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self._data.get(collection, {}).values():
            if _matches(doc, filters):
                return copy.deepcopy(doc)
        return None

    async def delete(self, collection: str, id: str) -> bool:
        async with self._lock:
            docs = self._data.get(collection, {})
            if id not in docs:
                return False
            del docs[id]
            await self._persist(collection)
            return True

    async def delete_many(self, collection: str, filters: dict[str, Any]) -> int:
        async with self._lock:
            docs = self._data.get(collection, {})
            doomed = [doc_id for doc_id, doc in docs.items() if _matches(doc, filters)]
            for doc_id in doomed:
                del docs[doc_id]
            if doomed:
                await self._persist(collection)
            return len(doomed)

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = 100,
        offset: int = 0,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        results = [doc for doc in self._data.get(collection, {}).values() if _matches(doc, filters)]

        if order_by:
            descending = order_by.startswith("-")
            results.sort(key=_sort_key(order_by.lstrip("-")), reverse=descending)

        end = None if limit is None else offset + limit
        return copy.deepcopy(results[offset:end])

    async def count(self, collection: str, filters: dict[str, Any] | None = None) -> int:
        return sum(1 for doc in self._data.get(collection, {}).values() if _matches(doc, filters))

    async def update(self, collection: str, id: str, updates: dict[str, Any]) -> bool:
        async with self._lock:
            docs = self._data.get(collection, {})
            if id not in docs:
                return False
            updated = {**docs[id], **copy.deepcopy(updates), "id": id}
            self._check_unique(collection, id, updated)
            docs[id] = updated
            await self._persist(collection)
            return True

    async def increment(self, collection: str, id: str, field: str, amount: int = 1, floor: int = 0) -> int:
        async with self._lock:
            doc = self._collection(collection).setdefault(id, {"id": id})
            value = max(int(doc.get(field, floor)), floor) + amount
            doc[field] = value
            await self._persist(collection)
            return value


# =============================================================================
# JSON File Metadata Storage
# =============================================================================


class JsonFileMetadataStorage(InMemoryMetadataStorage):
    """
    Document storage persisted as one JSON file per collection.

    The whole collection is kept in memory and rewritten atomically
    (temp file + rename) after every write. Suitable for a single process.
    """

    def __init__(self, base_path: str = "./data/documents"):
        super().__init__()
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._load()

    def _path(self, collection: str) -> Path:
        return self.base_path / f"{collection}.json"

    def _load(self) -> None:
        for path in self.base_path.glob("*.json"):
            with path.open(encoding="utf-8") as f:
                docs = json.load(f)
            self._data[path.stem] = {doc["id"]: doc for doc in docs}
            logger.debug("Loaded %d documents from %s", len(docs), path)

    async def _persist(self, collection: str) -> None:
        docs = list(self._data.get(collection, {}).values())
        target = self._path(collection)
        fd, tmp = tempfile.mkstemp(dir=self.base_path, prefix=f".{collection}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(docs, f, ensure_ascii=False, indent=2)
            os.replace(tmp, target)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
