"""Collection persistence built on the generic record store.

Updates:
  v0.2.0 - 2026-01-09 - Add aggregate prompt counts and default-collection lookup.
  v0.1.0 - 2025-12-13 - Introduce CollectionRepository.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from models.collection_model import (
    DEFAULT_COLLECTION_COLOR,
    Collection,
    CollectionWithCount,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)

from .base import RecordStore, RepositoryNotFoundError, new_record_id, now_ms

if TYPE_CHECKING:
    from collections.abc import Callable

    from .base import SQLiteEngine
    from .saved_prompts import SavedPromptRepository

logger = logging.getLogger("prompt_enhancer.repository.collections")

COLLECTIONS_TABLE = "collections"
COLLECTION_INDEXES: tuple[str, ...] = ("sort_order", "is_default", "created_at")


class CollectionRepository:
    """CRUD for collections; deleting a collection removes its saved prompts."""

    def __init__(
        self,
        engine: SQLiteEngine,
        saved_prompts: SavedPromptRepository,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._store = RecordStore(engine, COLLECTIONS_TABLE, COLLECTION_INDEXES)
        self._saved_prompts = saved_prompts
        self._clock = clock

    def create(self, request: CreateCollectionRequest) -> Collection:
        """Persist a new collection placed after every existing one."""
        timestamp = self._clock()
        collection = Collection(
            id=new_record_id(),
            name=request.name,
            description=request.description,
            color=request.color or DEFAULT_COLLECTION_COLOR,
            is_default=request.is_default,
            sort_order=self._next_sort_order(),
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._store.add(collection.to_record())
        logger.debug("Created collection", extra={"collection_id": collection.id})
        return collection

    def get_all(self) -> list[Collection]:
        """Return every collection ordered by ``sort_order``."""
        return [
            Collection.from_record(record)
            for record in self._store.iterate("sort_order", direction="asc")
        ]

    def get_all_with_counts(self) -> list[CollectionWithCount]:
        return [
            CollectionWithCount.from_collection(
                collection,
                self._saved_prompts.count_by_collection(collection.id),
            )
            for collection in self.get_all()
        ]

    def get_by_id(self, collection_id: str) -> Collection | None:
        record = self._store.get(collection_id)
        if record is None:
            return None
        return Collection.from_record(record)

    def update(self, collection_id: str, request: UpdateCollectionRequest) -> Collection:
        """Merge the non-``None`` fields of *request* into the stored collection."""
        existing = self.get_by_id(collection_id)
        if existing is None:
            raise RepositoryNotFoundError(f"Collection {collection_id} not found")
        changes = {
            field: value
            for field, value in (
                ("name", request.name),
                ("description", request.description),
                ("color", request.color),
                ("sort_order", request.sort_order),
            )
            if value is not None
        }
        updated = replace(existing, **changes, updated_at=self._clock())
        self._store.put(updated.to_record())
        return updated

    def delete(self, collection_id: str) -> None:
        """Delete the collection, then every saved prompt that belongs to it.

        The two steps are separate transactions; a failure between them leaves
        orphaned prompts behind.
        """
        self._store.delete(collection_id)
        removed = self._saved_prompts.delete_by_collection(collection_id)
        logger.info(
            "Deleted collection",
            extra={"collection_id": collection_id, "removed_prompts": removed},
        )

    def get_or_create_default(self, target_name: str) -> Collection:
        """Return the default collection named *target_name*, creating it when absent."""
        for collection in self.get_all():
            if collection.is_default and collection.name == target_name:
                return collection
        return self.create(CreateCollectionRequest(name=target_name, is_default=True))

    def _next_sort_order(self) -> int:
        last = self._store.iterate("sort_order", direction="desc").first()
        if last is None:
            return 0
        return int(last["sort_order"]) + 1


__all__ = ["COLLECTIONS_TABLE", "COLLECTION_INDEXES", "CollectionRepository"]
