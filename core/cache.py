"""TTL caches for prompt enhancement results.

Two interchangeable backends share the :class:`EnhancementCache` protocol: an
in-process :class:`TTLCache` (default) and :class:`RedisTTLCache`, which keeps
entries in Redis with ``SETEX`` so expiry is handled server-side.

Updates:
  v0.2.0 - 2026-01-12 - Add Redis-backed cache sharing the in-memory contract.
  v0.1.1 - 2025-12-19 - Evict expired entries lazily on ``set`` to bound memory.
  v0.1.0 - 2025-12-12 - Introduce explicit TTL cache instance and key hashing.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from redis.exceptions import RedisError

from .exceptions import PromptEnhancerError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("prompt_enhancer.cache")

DEFAULT_CACHE_TTL_SECONDS = 12 * 60 * 60
DEFAULT_REDIS_KEY_PREFIX = "prompt_enhancer:enhancement:"


class EnhancementCacheError(PromptEnhancerError):
    """Raised when the Redis cache cannot be read or written."""


class EnhancementCache(Protocol):
    """Key/value cache with time-based expiry."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self) -> None: ...


class RedisClientProtocol(Protocol):
    """Subset of redis-py client behaviour used by the cache."""

    def get(self, name: str) -> Any: ...

    def setex(self, name: str, time: int, value: str) -> Any: ...

    def delete(self, *names: str) -> Any: ...

    def scan_iter(self, match: str | None = None) -> Any: ...


def generate_cache_key(*values: str) -> str:
    """Return a SHA-256 hex digest of *values* joined with ``|``."""
    combined = "|".join(values)
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()


@dataclass(slots=True)
class CacheEntry:
    """Cached value together with its absolute expiry (epoch seconds)."""

    value: str
    expires_at: float


class TTLCache:
    """Thread-safe in-memory cache whose entries expire after a fixed TTL."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("TTL must be greater than 0")
        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: str) -> str | None:
        """Return the cached value for *key*, or ``None`` when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any existing entry."""
        with self._lock:
            now = self._clock()
            expired = [name for name, entry in self._entries.items() if now > entry.expires_at]
            for name in expired:
                del self._entries[name]
            if expired:
                logger.debug("Evicted %d expired enhancement cache entries", len(expired))
            self._entries[key] = CacheEntry(value=value, expires_at=now + self._ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Return the number of stored entries, including not yet evicted ones."""
        with self._lock:
            return len(self._entries)


class RedisTTLCache:
    """Enhancement cache persisted in Redis with server-side expiry."""

    def __init__(
        self,
        client: RedisClientProtocol,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        *,
        key_prefix: str = DEFAULT_REDIS_KEY_PREFIX,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("TTL must be greater than 0")
        self._client = client
        self._ttl_seconds = int(ttl_seconds)
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            cached_value = self._client.get(self._key(key))
        except RedisError as exc:
            raise EnhancementCacheError("Unable to read enhancement cache") from exc
        if cached_value is None:
            return None
        if isinstance(cached_value, memoryview):
            return cached_value.tobytes().decode("utf-8")
        if isinstance(cached_value, bytes):
            return cached_value.decode("utf-8")
        return str(cached_value)

    def set(self, key: str, value: str) -> None:
        try:
            self._client.setex(self._key(key), self._ttl_seconds, value)
        except RedisError as exc:
            raise EnhancementCacheError("Unable to write enhancement cache") from exc

    def clear(self) -> None:
        """Delete every key stored under this cache's prefix."""
        try:
            keys = list(self._client.scan_iter(match=f"{self._key_prefix}*"))
            if keys:
                self._client.delete(*keys)
        except RedisError as exc:
            raise EnhancementCacheError("Unable to clear enhancement cache") from exc


__all__ = [
    "CacheEntry",
    "DEFAULT_CACHE_TTL_SECONDS",
    "EnhancementCache",
    "EnhancementCacheError",
    "RedisTTLCache",
    "TTLCache",
    "generate_cache_key",
]
