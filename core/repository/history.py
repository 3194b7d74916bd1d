"""Rolling history of recent enhancements.

Updates: v0.1.0 - 2026-01-11 - Introduce PromptHistoryRepository capped at the configured limit.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from models.history_model import PromptHistoryEntry, SavePromptHistoryRequest

from .base import RecordStore, new_record_id, now_ms

if TYPE_CHECKING:
    from collections.abc import Callable

    from .base import SQLiteEngine

logger = logging.getLogger("prompt_enhancer.repository.history")

HISTORY_TABLE = "prompt_history"
HISTORY_INDEXES: tuple[str, ...] = ("timestamp",)
DEFAULT_HISTORY_LIMIT = 50


class PromptHistoryRepository:
    """Append-only enhancement history that keeps the newest ``limit`` entries."""

    def __init__(
        self,
        engine: SQLiteEngine,
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if limit <= 0:
            raise ValueError("History limit must be positive")
        self._store = RecordStore(engine, HISTORY_TABLE, HISTORY_INDEXES)
        self._limit = limit
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit

    def save(self, request: SavePromptHistoryRequest) -> PromptHistoryEntry:
        entry = PromptHistoryEntry(
            id=new_record_id(),
            original_prompt=request.original_prompt,
            enhanced_prompt=request.enhanced_prompt,
            target=request.target,
            timestamp=self._clock(),
        )
        self._store.add(entry.to_record())
        self._trim()
        return entry

    def get_all(self) -> list[PromptHistoryEntry]:
        """Return history entries, newest first."""
        return [
            PromptHistoryEntry.from_record(record)
            for record in self._store.iterate("timestamp", direction="desc")
        ]

    def delete(self, entry_id: str) -> None:
        self._store.delete(entry_id)

    def clear(self) -> None:
        self._store.clear()

    def _trim(self) -> None:
        excess = self._store.count() - self._limit
        if excess <= 0:
            return
        oldest = itertools.islice(self._store.iterate("timestamp", direction="asc"), excess)
        stale_ids = [record["id"] for record in oldest]
        for entry_id in stale_ids:
            self._store.delete(entry_id)
        logger.debug("Trimmed prompt history", extra={"removed": len(stale_ids)})


__all__ = ["DEFAULT_HISTORY_LIMIT", "HISTORY_INDEXES", "HISTORY_TABLE", "PromptHistoryRepository"]
