"""Core service layer for Prompt Enhancer.

Updates:
  v0.3.0 - 2026-01-11 - Export prompt history repository and token counting helpers.
  v0.2.0 - 2025-12-20 - Export factory builders for shared bootstrap.
  v0.1.0 - 2025-12-13 - Surface PromptEnhancer, caches, and the prompt library.
"""

from .cache import EnhancementCache, EnhancementCacheError, RedisTTLCache, TTLCache
from .enhancer import ModelCaller, PromptEnhancer
from .exceptions import (
    EnhancementError,
    ModelCallError,
    NotFoundError,
    PromptEnhancerError,
    ValidationError,
)
from .factory import build_cache, build_enhancer, build_library, build_model_client
from .model_client import LiteLLMModelClient
from .repository import (
    CollectionRepository,
    PromptHistoryRepository,
    PromptLibrary,
    RecordStore,
    RepositoryError,
    RepositoryNotFoundError,
    SavedPromptRepository,
    SQLiteEngine,
)
from .token_count import count_tokens, threshold_category, token_efficiency
from .tool_categories import ToolCategory, resolve_category, system_prompt_for
from .validation import validate_input

__all__ = [
    "CollectionRepository",
    "EnhancementCache",
    "EnhancementCacheError",
    "EnhancementError",
    "LiteLLMModelClient",
    "ModelCallError",
    "ModelCaller",
    "NotFoundError",
    "PromptEnhancer",
    "PromptEnhancerError",
    "PromptHistoryRepository",
    "PromptLibrary",
    "RecordStore",
    "RedisTTLCache",
    "RepositoryError",
    "RepositoryNotFoundError",
    "SQLiteEngine",
    "SavedPromptRepository",
    "TTLCache",
    "ToolCategory",
    "ValidationError",
    "build_cache",
    "build_enhancer",
    "build_library",
    "build_model_client",
    "count_tokens",
    "resolve_category",
    "system_prompt_for",
    "threshold_category",
    "token_efficiency",
    "validate_input",
]
