"""Saved prompt data model definitions.

Updates: v0.1.0 - 2025-12-13 - Add SavedPrompt dataclass and request payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class SavedPrompt:
    """Persisted original/enhanced prompt pair owned by one collection."""

    id: str
    original_prompt: str
    enhanced_prompt: str
    target: str
    collection_id: str
    created_at: int
    updated_at: int
    notes: str | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "original_prompt": self.original_prompt,
            "enhanced_prompt": self.enhanced_prompt,
            "target": self.target,
            "collection_id": self.collection_id,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> SavedPrompt:
        notes = data.get("notes")
        return cls(
            id=str(data["id"]),
            original_prompt=str(data.get("original_prompt") or ""),
            enhanced_prompt=str(data.get("enhanced_prompt") or ""),
            target=str(data.get("target") or ""),
            collection_id=str(data.get("collection_id") or ""),
            notes=str(notes) if notes is not None else None,
            created_at=int(data.get("created_at") or 0),
            updated_at=int(data.get("updated_at") or data.get("created_at") or 0),
        )


@dataclass(slots=True, frozen=True)
class SavePromptRequest:
    original_prompt: str
    enhanced_prompt: str
    target: str
    collection_id: str
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateSavedPromptRequest:
    """Partial update; ``None`` fields are left unchanged."""

    collection_id: str | None = None
    notes: str | None = None


__all__ = ["SavePromptRequest", "SavedPrompt", "UpdateSavedPromptRequest"]
