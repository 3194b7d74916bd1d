"""Collection data model definitions.

Updates:
  v0.2.0 - 2026-01-09 - Add CollectionWithCount for aggregate listings.
  v0.1.0 - 2025-12-13 - Add Collection dataclass and request payloads.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

COLLECTION_COLORS: tuple[str, ...] = (
    "#007AFF",  # blue
    "#34C759",  # green
    "#FF9500",  # orange
    "#FF3B30",  # red
    "#AF52DE",  # purple
    "#5856D6",  # indigo
    "#FF2D55",  # pink
    "#00C7BE",  # teal
    "#FFD60A",  # yellow
    "#8E8E93",  # gray
)

DEFAULT_COLLECTION_COLOR = COLLECTION_COLORS[0]


@dataclass(slots=True)
class Collection:
    """User-named, coloured grouping of saved prompts."""

    id: str
    name: str
    color: str
    is_default: bool
    sort_order: int
    created_at: int
    updated_at: int
    description: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping for the record store."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "is_default": self.is_default,
            "sort_order": self.sort_order,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Collection:
        """Hydrate a Collection from a stored mapping."""
        description = data.get("description")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(description) if description is not None else None,
            color=str(data.get("color") or DEFAULT_COLLECTION_COLOR),
            is_default=bool(data.get("is_default", False)),
            sort_order=int(data.get("sort_order") or 0),
            created_at=int(data.get("created_at") or 0),
            updated_at=int(data.get("updated_at") or data.get("created_at") or 0),
        )


@dataclass(slots=True)
class CollectionWithCount(Collection):
    """Collection annotated with the number of prompts it holds."""

    prompt_count: int = 0

    @classmethod
    def from_collection(cls, collection: Collection, prompt_count: int) -> CollectionWithCount:
        return cls(**asdict(collection), prompt_count=prompt_count)


@dataclass(slots=True, frozen=True)
class CreateCollectionRequest:
    name: str
    description: str | None = None
    color: str | None = None
    is_default: bool = False


@dataclass(slots=True, frozen=True)
class UpdateCollectionRequest:
    """Partial update; ``None`` fields are left unchanged."""

    name: str | None = None
    description: str | None = None
    color: str | None = None
    sort_order: int | None = None


__all__ = [
    "COLLECTION_COLORS",
    "DEFAULT_COLLECTION_COLOR",
    "Collection",
    "CollectionWithCount",
    "CreateCollectionRequest",
    "UpdateCollectionRequest",
]
