"""SQLite-backed local library for collections, saved prompts, and history.

Updates:
  v0.3.0 - 2026-01-11 - Add prompt history to the library.
  v0.2.0 - 2025-12-20 - Share one SQLiteEngine across repositories.
  v0.1.0 - 2025-12-13 - Compose collection and saved prompt repositories.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .base import (
    MEMORY_DATABASE,
    RecordCursor,
    RecordStore,
    RepositoryError,
    RepositoryNotFoundError,
    SQLiteEngine,
    new_record_id,
    now_ms,
)
from .collections import CollectionRepository
from .history import DEFAULT_HISTORY_LIMIT, PromptHistoryRepository
from .saved_prompts import SavedPromptRepository

if TYPE_CHECKING:
    from collections.abc import Callable


class PromptLibrary:
    """Compose the repositories that share one SQLite database."""

    def __init__(
        self,
        db_path: str | Path,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.engine = SQLiteEngine(db_path)
        self.saved_prompts = SavedPromptRepository(self.engine, clock=clock)
        self.collections = CollectionRepository(self.engine, self.saved_prompts, clock=clock)
        self.history = PromptHistoryRepository(self.engine, limit=history_limit, clock=clock)

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> PromptLibrary:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "CollectionRepository",
    "MEMORY_DATABASE",
    "PromptHistoryRepository",
    "PromptLibrary",
    "RecordCursor",
    "RecordStore",
    "RepositoryError",
    "RepositoryNotFoundError",
    "SQLiteEngine",
    "SavedPromptRepository",
    "new_record_id",
    "now_ms",
]
