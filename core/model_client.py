"""LiteLLM-backed language model collaborator used by the enhancer.

Updates:
  v0.2.2 - 2026-01-18 - Report an abort when cancellation interrupts a failing attempt.
  v0.2.1 - 2026-01-15 - Honour cancellation between retry attempts.
  v0.2.0 - 2026-01-10 - Retry transient provider failures with x3 backoff.
  v0.1.0 - 2025-12-12 - Introduce LiteLLM chat completion client.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import ModelCallError
from .litellm_adapter import (
    apply_configured_drop_params,
    call_completion_with_fallback,
    extract_completion_text,
    get_completion,
)
from .retry import is_retryable_model_error, retry

if TYPE_CHECKING:
    import threading

logger = logging.getLogger("prompt_enhancer.model")

ABORTED_STATUS_CODE = 499


@dataclass(slots=True)
class LiteLLMModelClient:
    """Rewrite prompts through ``litellm.completion`` with bounded retries."""

    model: str | None
    api_key: str | None = None
    api_base: str | None = None
    api_version: str | None = None
    temperature: float = 0.7
    max_tokens: int = 500
    retry_attempts: int = 2
    retry_delay_seconds: float = 0.3
    timeout_seconds: float | None = None
    drop_params: Sequence[str] | None = None

    def __call__(
        self,
        system_prompt: str,
        user_prompt: str,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Return the model's rewrite of *user_prompt* under *system_prompt*."""
        if not self.model:
            raise ModelCallError(
                "LiteLLM model is not configured. Set PROMPT_ENHANCER_LITELLM_MODEL.",
                500,
                False,
            )
        completion, lite_llm_exception = get_completion()
        request = self._build_request(system_prompt, user_prompt)

        def _aborted() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        def _attempt() -> str:
            if _aborted():
                raise ModelCallError("Request was aborted", ABORTED_STATUS_CODE, False)
            response = call_completion_with_fallback(request, completion, lite_llm_exception)
            text = extract_completion_text(response)
            if not text:
                raise ModelCallError(
                    "The model returned an empty response. Please try again.", 500, True
                )
            return text

        def _should_retry(exc: Exception) -> bool:
            if _aborted():
                return False
            if isinstance(exc, ModelCallError):
                return exc.retryable
            retryable = is_retryable_model_error(exc)
            if retryable:
                logger.info("Retrying model call after transient error: %s", exc)
            return retryable

        def _sleep(delay: float) -> None:
            if cancel_event is not None:
                cancel_event.wait(delay)
            else:
                time.sleep(delay)

        attempts = max(0, int(self.retry_attempts)) + 1
        try:
            text = retry(
                _attempt,
                max_attempts=attempts,
                base_delay_seconds=self.retry_delay_seconds,
                max_delay_seconds=self.retry_delay_seconds * 9,
                backoff_factor=3.0,
                jitter_fraction=0.0,
                should_retry=_should_retry,
                sleep=_sleep,
            )
        except ModelCallError as exc:
            if _aborted() and exc.status_code != ABORTED_STATUS_CODE:
                raise ModelCallError("Request was aborted", ABORTED_STATUS_CODE, False) from exc
            raise
        except Exception as exc:
            if _aborted():
                raise ModelCallError("Request was aborted", ABORTED_STATUS_CODE, False) from exc
            raise self._to_model_error(exc, attempts) from exc

        if _aborted():
            raise ModelCallError("Request was aborted", ABORTED_STATUS_CODE, False)
        return text

    def _build_request(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        request: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if self.timeout_seconds is not None:
            request["timeout"] = self.timeout_seconds
        if self.api_key:
            request["api_key"] = self.api_key
        if self.api_base:
            request["api_base"] = self.api_base
        if self.api_version:
            request["api_version"] = self.api_version
        dropped = apply_configured_drop_params(request, self.drop_params)
        if dropped:
            logger.debug(
                "Dropping LiteLLM parameters for prompt enhancement",
                extra={"model": self.model, "dropped_params": list(dropped)},
            )
        return request

    @staticmethod
    def _to_model_error(exc: Exception, attempts: int) -> ModelCallError:
        status_code = getattr(exc, "status_code", None)
        retryable = is_retryable_model_error(exc)
        if isinstance(status_code, int):
            return ModelCallError(f"Model API error: {exc}", status_code, retryable)
        if retryable:
            return ModelCallError(
                f"Network error after {attempts} attempts: {exc}", 503, True
            )
        return ModelCallError(f"Unexpected error calling model: {exc}", 500, False)


__all__ = ["ABORTED_STATUS_CODE", "LiteLLMModelClient"]
