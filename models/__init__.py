"""Data models for Prompt Enhancer.

Updates: v0.2.0 - 2026-01-11 - Export PromptHistoryEntry dataclass.
Updates: v0.1.0 - 2025-12-13 - Export Collection and SavedPrompt dataclasses.
"""

from .collection_model import (
    COLLECTION_COLORS,
    DEFAULT_COLLECTION_COLOR,
    Collection,
    CollectionWithCount,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)
from .history_model import PromptHistoryEntry, SavePromptHistoryRequest
from .saved_prompt_model import SavedPrompt, SavePromptRequest, UpdateSavedPromptRequest

__all__ = [
    "COLLECTION_COLORS",
    "DEFAULT_COLLECTION_COLOR",
    "Collection",
    "CollectionWithCount",
    "CreateCollectionRequest",
    "PromptHistoryEntry",
    "SavePromptHistoryRequest",
    "SavePromptRequest",
    "SavedPrompt",
    "UpdateCollectionRequest",
    "UpdateSavedPromptRequest",
]
