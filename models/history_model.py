"""Prompt history data model definitions.

Updates: v0.1.0 - 2026-01-11 - Add PromptHistoryEntry for recent enhancements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class PromptHistoryEntry:
    """Single enhancement recorded in the rolling history."""

    id: str
    original_prompt: str
    enhanced_prompt: str
    target: str
    timestamp: int

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "original_prompt": self.original_prompt,
            "enhanced_prompt": self.enhanced_prompt,
            "target": self.target,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> PromptHistoryEntry:
        return cls(
            id=str(data["id"]),
            original_prompt=str(data.get("original_prompt") or ""),
            enhanced_prompt=str(data.get("enhanced_prompt") or ""),
            target=str(data.get("target") or ""),
            timestamp=int(data.get("timestamp") or 0),
        )


@dataclass(slots=True, frozen=True)
class SavePromptHistoryRequest:
    original_prompt: str
    enhanced_prompt: str
    target: str


__all__ = ["PromptHistoryEntry", "SavePromptHistoryRequest"]
