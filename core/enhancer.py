"""Prompt enhancement dispatcher.

:class:`PromptEnhancer` validates the request, consults its cache, picks the
instruction template for the resolved tool category, and calls the language
model collaborator at most once per distinct ``(category, prompt)`` pair within
the cache TTL.

Updates:
  v0.3.0 - 2026-01-12 - Accept any EnhancementCache backend (memory or Redis).
  v0.2.0 - 2025-12-22 - Key cache entries by resolved category instead of raw target.
  v0.1.0 - 2025-12-12 - Extract enhancement flow with an explicitly owned cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from .cache import TTLCache, generate_cache_key
from .exceptions import EnhancementError, ModelCallError, ValidationError
from .tool_categories import resolve_category, system_prompt_for
from .validation import validate_input

if TYPE_CHECKING:
    import threading

    from .cache import EnhancementCache

logger = logging.getLogger("prompt_enhancer.enhancer")


class ModelCaller(Protocol):
    """Callable that rewrites *user_prompt* under *system_prompt* via an LLM."""

    def __call__(
        self,
        system_prompt: str,
        user_prompt: str,
        cancel_event: threading.Event | None = None,
    ) -> str: ...


class PromptEnhancer:
    """Rewrite prompts for a target platform with result caching."""

    def __init__(
        self,
        call_model: ModelCaller,
        cache: EnhancementCache | None = None,
    ) -> None:
        self._call_model = call_model
        self._cache: EnhancementCache = cache if cache is not None else TTLCache()

    @property
    def cache(self) -> EnhancementCache:
        return self._cache

    @staticmethod
    def cache_key(target: str, prompt: str) -> str:
        """Return the cache key used for a *target*/*prompt* pair."""
        category = resolve_category(target.strip())
        return generate_cache_key(category.value, prompt.strip())

    def enhance(
        self,
        target: str,
        prompt: str,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Return an enhanced version of *prompt* tailored to *target*.

        Raises:
          ValidationError: When *target* or *prompt* is malformed.
          ModelCallError: When the model collaborator reports a failure.
          EnhancementError: For any other unexpected failure of the model call.
        """
        validate_input(target, prompt)

        trimmed_target = target.strip()
        trimmed_prompt = prompt.strip()
        category = resolve_category(trimmed_target)
        key = generate_cache_key(category.value, trimmed_prompt)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(
                "Enhancement cache hit",
                extra={"category": category.value, "target": trimmed_target},
            )
            return cached

        system_prompt = system_prompt_for(category)
        logger.debug(
            "Enhancing prompt via model",
            extra={"category": category.value, "prompt_length": len(trimmed_prompt)},
        )
        try:
            enhanced = self._call_model(system_prompt, trimmed_prompt, cancel_event)
        except (ValidationError, ModelCallError):
            raise
        except Exception as exc:
            logger.exception("Unexpected failure while enhancing prompt")
            raise EnhancementError(f"Failed to enhance prompt: {exc}") from exc

        self._cache.set(key, enhanced)
        return enhanced


__all__ = ["ModelCaller", "PromptEnhancer"]
