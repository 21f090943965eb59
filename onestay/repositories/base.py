"""
Repository base.

A repository wraps one storage collection and converts between stored
documents and domain models. Uniqueness violations surface unchanged as
DuplicateKeyError; services decide what they mean.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from onestay.core.models import to_document
from onestay.storage import MetadataStorage

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Generic[ModelT]):
    """Typed access to a single collection."""

    collection: str
    model: type[ModelT]

    def __init__(self, storage: MetadataStorage):
        self.storage = storage

    def _load(self, doc: dict[str, Any] | None) -> ModelT | None:
        return self.model.model_validate(doc) if doc is not None else None

    async def find_by_id(self, id: str) -> ModelT | None:
        return self._load(await self.storage.get(self.collection, id))

    async def find_one(self, **filters: Any) -> ModelT | None:
        return self._load(await self.storage.find_one(self.collection, filters))

    async def find_many(
        self,
        filters: dict[str, Any] | None = None,
        limit: int | None = 100,
        offset: int = 0,
        order_by: str | None = None,
    ) -> list[ModelT]:
        docs = await self.storage.query(
            self.collection, filters, limit=limit, offset=offset, order_by=order_by
        )
        return [self.model.model_validate(doc) for doc in docs]

    async def insert(self, entity: ModelT) -> ModelT:
        await self.storage.save(self.collection, entity.id, to_document(entity))
        return entity

    async def update(self, id: str, updates: dict[str, Any]) -> bool:
        return await self.storage.update(self.collection, id, updates)

    async def delete(self, id: str) -> bool:
        return await self.storage.delete(self.collection, id)
