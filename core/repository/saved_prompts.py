"""Saved prompt persistence built on the generic record store.

Updates:
  v0.2.0 - 2026-01-09 - Add per-collection counts and target lookups.
  v0.1.0 - 2025-12-13 - Introduce SavedPromptRepository with bulk operations.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from models.saved_prompt_model import SavedPrompt, SavePromptRequest, UpdateSavedPromptRequest

from .base import RecordStore, RepositoryNotFoundError, new_record_id, now_ms

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .base import SQLiteEngine

logger = logging.getLogger("prompt_enhancer.repository.saved_prompts")

SAVED_PROMPTS_TABLE = "saved_prompts"
SAVED_PROMPT_INDEXES: tuple[str, ...] = ("collection_id", "target", "created_at")


def _newest_first(records: Iterable[dict[str, Any]]) -> list[SavedPrompt]:
    # Equality scans come back in insertion order; reversing first keeps the
    # stable sort breaking created_at ties newest first.
    prompts = [SavedPrompt.from_record(record) for record in records]
    prompts.reverse()
    return sorted(prompts, key=lambda prompt: prompt.created_at, reverse=True)


class SavedPromptRepository:
    """CRUD plus move and bulk operations for saved prompts."""

    def __init__(self, engine: SQLiteEngine, *, clock: Callable[[], int] = now_ms) -> None:
        self._store = RecordStore(engine, SAVED_PROMPTS_TABLE, SAVED_PROMPT_INDEXES)
        self._clock = clock

    def save(self, request: SavePromptRequest) -> SavedPrompt:
        timestamp = self._clock()
        prompt = SavedPrompt(
            id=new_record_id(),
            original_prompt=request.original_prompt,
            enhanced_prompt=request.enhanced_prompt,
            target=request.target,
            collection_id=request.collection_id,
            notes=request.notes,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._store.add(prompt.to_record())
        return prompt

    def get_all(self) -> list[SavedPrompt]:
        """Return every saved prompt, newest first."""
        return [
            SavedPrompt.from_record(record)
            for record in self._store.iterate("created_at", direction="desc")
        ]

    def get_by_collection(self, collection_id: str) -> list[SavedPrompt]:
        """Return the prompts of *collection_id*, newest first."""
        return _newest_first(self._store.iterate("collection_id", equals=collection_id))

    def get_by_target(self, target: str) -> list[SavedPrompt]:
        return _newest_first(self._store.iterate("target", equals=target))

    def get_by_id(self, prompt_id: str) -> SavedPrompt | None:
        record = self._store.get(prompt_id)
        if record is None:
            return None
        return SavedPrompt.from_record(record)

    def count_by_collection(self, collection_id: str) -> int:
        return self._store.count("collection_id", equals=collection_id)

    def update(self, prompt_id: str, request: UpdateSavedPromptRequest) -> SavedPrompt:
        """Merge the non-``None`` fields of *request* into the stored prompt."""
        existing = self.get_by_id(prompt_id)
        if existing is None:
            raise RepositoryNotFoundError(f"Saved prompt {prompt_id} not found")
        changes = {
            field: value
            for field, value in (
                ("collection_id", request.collection_id),
                ("notes", request.notes),
            )
            if value is not None
        }
        updated = replace(existing, **changes, updated_at=self._clock())
        self._store.put(updated.to_record())
        return updated

    def delete(self, prompt_id: str) -> None:
        self._store.delete(prompt_id)

    def move(self, prompt_id: str, new_collection_id: str) -> SavedPrompt:
        return self.update(prompt_id, UpdateSavedPromptRequest(collection_id=new_collection_id))

    def bulk_delete(self, prompt_ids: Iterable[str]) -> None:
        """Delete each prompt in turn; each deletion is its own transaction."""
        for prompt_id in prompt_ids:
            self._store.delete(prompt_id)

    def bulk_move(self, prompt_ids: Iterable[str], new_collection_id: str) -> None:
        """Move each prompt in turn; missing prompts raise ``RepositoryNotFoundError``."""
        for prompt_id in prompt_ids:
            self.move(prompt_id, new_collection_id)

    def delete_by_collection(self, collection_id: str) -> int:
        """Delete every prompt of *collection_id* and return how many were removed."""
        prompt_ids = [prompt.id for prompt in self.get_by_collection(collection_id)]
        self.bulk_delete(prompt_ids)
        if prompt_ids:
            logger.debug(
                "Removed collection prompts",
                extra={"collection_id": collection_id, "count": len(prompt_ids)},
            )
        return len(prompt_ids)


__all__ = ["SAVED_PROMPTS_TABLE", "SAVED_PROMPT_INDEXES", "SavedPromptRepository"]
