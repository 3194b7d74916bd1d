"""Factories for constructing enhancer and library instances from validated settings.

Updates:
  v0.2.0 - 2026-01-11 - Build the prompt library with a configurable history limit.
  v0.1.1 - 2025-12-20 - Fall back to the in-memory cache when Redis is unreachable.
  v0.1.0 - 2025-12-13 - Introduce cache, enhancer, and library builders.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import redis
from redis.exceptions import RedisError

from .cache import EnhancementCache, RedisTTLCache, TTLCache
from .enhancer import ModelCaller, PromptEnhancer
from .model_client import LiteLLMModelClient
from .repository import PromptLibrary

if TYPE_CHECKING:  # pragma: no cover - typing only
    from redis import Redis

    from config import PromptEnhancerSettings
else:  # pragma: no cover - typing only
    PromptEnhancerSettings = Any
    Redis = Any

factory_logger = logging.getLogger("prompt_enhancer.factory")


def _resolve_redis_client(
    redis_dsn: str | None,
    redis_client: Redis | None,
) -> tuple[Redis | None, str | None]:
    """Create a Redis client when a DSN is provided but no client supplied."""
    if redis_client is not None or not redis_dsn:
        return redis_client, None
    from_url = cast("Callable[[str], Redis]", redis.from_url)
    try:
        client = from_url(redis_dsn)
    except (RedisError, ValueError) as exc:
        reason = (
            "Redis caching disabled: unable to configure the client. "
            f"DSN={redis_dsn!s}; error={exc}"
        )
        return None, reason
    return client, None


def _check_redis_available(client: Redis) -> str | None:
    """Return a reason string when *client* cannot reach its server."""
    try:
        client.ping()
    except RedisError as exc:
        return f"Redis caching disabled: server unreachable; error={exc}"
    return None


def build_cache(
    settings: PromptEnhancerSettings,
    *,
    redis_client: Redis | None = None,
) -> EnhancementCache:
    """Return the Redis-backed cache when available, otherwise an in-memory TTL cache."""
    resolved_redis, reason = _resolve_redis_client(settings.redis_dsn, redis_client)
    if resolved_redis is not None:
        reason = _check_redis_available(resolved_redis)
        if reason is None:
            factory_logger.debug("Using Redis enhancement cache")
            return RedisTTLCache(resolved_redis, settings.cache_ttl_seconds)
    if reason:
        factory_logger.info(reason)
    return TTLCache(settings.cache_ttl_seconds)


def build_model_client(settings: PromptEnhancerSettings) -> LiteLLMModelClient:
    return LiteLLMModelClient(
        model=settings.litellm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        api_version=settings.litellm_api_version,
        temperature=settings.litellm_temperature,
        max_tokens=settings.litellm_max_tokens,
        retry_attempts=settings.litellm_retry_attempts,
        retry_delay_seconds=settings.litellm_retry_delay_seconds,
        timeout_seconds=settings.request_timeout_seconds,
        drop_params=settings.litellm_drop_params,
    )


def build_enhancer(
    settings: PromptEnhancerSettings,
    *,
    call_model: ModelCaller | None = None,
    cache: EnhancementCache | None = None,
    redis_client: Redis | None = None,
) -> PromptEnhancer:
    """Return a PromptEnhancer wired from *settings*; collaborators may be overridden."""
    resolved_cache = (
        cache if cache is not None else build_cache(settings, redis_client=redis_client)
    )
    resolved_caller = call_model if call_model is not None else build_model_client(settings)
    return PromptEnhancer(resolved_caller, resolved_cache)


def build_library(settings: PromptEnhancerSettings) -> PromptLibrary:
    return PromptLibrary(settings.db_path, history_limit=settings.history_limit)


__all__ = ["build_cache", "build_enhancer", "build_library", "build_model_client"]
