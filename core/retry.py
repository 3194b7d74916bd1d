"""Retry helpers for transient model and network failures.

Updates:
  v0.2.0 - 2026-01-10 - Add configurable backoff factor and injectable sleep for cancellation.
  v0.1.1 - 2025-12-18 - Classify LiteLLM/OpenAI status errors as retryable.
  v0.1.0 - 2025-12-12 - Add exponential backoff retry helper.
"""

from __future__ import annotations

import random
import time
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

_RETRYABLE_HTTP_STATUS_CODES = {408, 429}
_RETRYABLE_MESSAGE_MARKERS = ("network", "timeout", "timed out", "econnreset", "enotfound")


def is_retryable_http_status(status_code: int) -> bool:
    """Return ``True`` when *status_code* suggests a transient failure."""
    return status_code in _RETRYABLE_HTTP_STATUS_CODES or 500 <= status_code < 600


def is_retryable_httpx_error(exc: Exception) -> bool:
    """Return ``True`` when *exc* represents a transient httpx error."""
    if isinstance(exc, httpx.HTTPStatusError):
        return is_retryable_http_status(exc.response.status_code)
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


def is_retryable_model_error(exc: Exception) -> bool:
    """Return ``True`` when a LiteLLM/OpenAI style error looks transient.

    Provider exceptions expose ``status_code``; connection problems surface either
    as httpx errors or as messages mentioning network failures.
    """
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return is_retryable_http_status(status_code)
    if is_retryable_httpx_error(exc):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _RETRYABLE_MESSAGE_MARKERS)


def compute_delay_seconds(
    attempt: int,
    *,
    base: float,
    maximum: float,
    jitter: float,
    factor: float = 2.0,
) -> float:
    """Return the backoff delay before retrying after *attempt* (1-based)."""
    delay = min(maximum, base * (factor ** (attempt - 1)))
    if jitter <= 0:
        return delay
    return delay + (delay * jitter * random.random())


def retry[T](
    operation: Callable[[], T],
    *,
    max_attempts: int = 3,
    base_delay_seconds: float = 0.5,
    max_delay_seconds: float = 4.0,
    backoff_factor: float = 2.0,
    jitter_fraction: float = 0.1,
    should_retry: Callable[[Exception], bool],
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Execute *operation* with exponential-backoff retries.

    Args:
      operation: Zero-argument callable to execute.
      max_attempts: Total attempts including the first call.
      base_delay_seconds: Base backoff delay for the second attempt.
      max_delay_seconds: Cap for exponential backoff.
      backoff_factor: Multiplier applied to the delay after each attempt.
      jitter_fraction: Add random jitter as a fraction of the computed delay.
      should_retry: Predicate that decides whether an exception is retryable.
      sleep: Function used to wait between attempts.

    Returns:
      The value returned by *operation* on success.

    Raises:
      Exception: Re-raises the last exception when retries are exhausted or non-retryable.
    """
    attempts = max(1, int(max_attempts))
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except Exception as exc:
            if attempt >= attempts or not should_retry(exc):
                raise
            if base_delay_seconds <= 0:
                continue
            delay = compute_delay_seconds(
                attempt,
                base=base_delay_seconds,
                maximum=max_delay_seconds,
                jitter=jitter_fraction,
                factor=backoff_factor,
            )
            sleep(delay)
    raise RuntimeError("retry exhausted retries")  # pragma: no cover


__all__ = [
    "compute_delay_seconds",
    "is_retryable_http_status",
    "is_retryable_httpx_error",
    "is_retryable_model_error",
    "retry",
]
