"""Shared LiteLLM adapters for Prompt Enhancer.

Updates:
  v0.3.0 - 2026-01-10 - Expose LiteLLM token counter alongside completion helpers.
  v0.2.0 - 2025-12-14 - Drop embedding helpers; enhancement only needs completions.
  v0.1.1 - 2025-12-13 - Strip drop parameters before LiteLLM retries to match provider support.
  v0.1.0 - 2025-12-12 - Provide shared completion import helpers.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence


class LiteLLMNotInstalledError(RuntimeError):
    """Raised when LiteLLM is not available in the current environment."""


_completion: Callable[..., object] | None = None
_token_counter: Callable[..., object] | None = None
_LiteLLMException: type[Exception] = Exception


def _ensure_loaded() -> None:
    """Import LiteLLM lazily so importing the core stays cheap."""

    global _completion, _token_counter, _LiteLLMException
    if _completion is not None:
        return
    try:  # pragma: no cover - runtime import path
        litellm = importlib.import_module("litellm")
    except ImportError as exc:
        raise LiteLLMNotInstalledError(
            "LiteLLM integration requires the dependency 'litellm'. "
            "Install it with `pip install litellm`."
        ) from exc

    completion = getattr(litellm, "completion", None)
    if completion is None:
        raise RuntimeError("litellm completion API is unavailable in the installed version.")
    token_counter = getattr(litellm, "token_counter", None)

    exceptions_module = importlib.import_module("litellm.exceptions")
    LiteLLMException = getattr(exceptions_module, "LiteLLMException", Exception)

    _completion = completion
    _token_counter = token_counter
    _LiteLLMException = LiteLLMException  # type: ignore[misc]


def get_completion() -> tuple[Callable[..., object], type[Exception]]:
    """Return the LiteLLM completion callable and exception type."""

    _ensure_loaded()
    assert _completion is not None  # pragma: no cover - defensive
    return _completion, _LiteLLMException


def get_token_counter() -> Callable[..., object]:
    """Return the LiteLLM token counter callable."""

    _ensure_loaded()
    if _token_counter is None:
        raise RuntimeError("litellm token_counter API is unavailable in the installed version.")
    return _token_counter


def call_completion_with_fallback(
    request: dict[str, object],
    completion: Callable[..., object],
    lite_llm_exception: type[Exception],
    *,
    drop_candidates: Iterable[str] | None = None,
) -> object:
    """Invoke LiteLLM completion and retry without unsupported params if necessary."""

    try:
        return completion(**request)  # type: ignore[arg-type]
    except lite_llm_exception as exc:  # type: ignore[arg-type]
        unsupported = _detect_unsupported_parameters(
            str(exc), request.keys(), drop_candidates
        )
        if not unsupported:
            raise
        trimmed_request = {
            key: value for key, value in request.items() if key not in unsupported
        }
        logging.getLogger("prompt_enhancer.litellm").info(
            "LiteLLM model rejected parameters %s; retrying request without them.",
            ", ".join(sorted(unsupported)),
        )
        return completion(**trimmed_request)  # type: ignore[arg-type]


def apply_configured_drop_params(
    request: dict[str, object],
    drop_params: Sequence[str] | None,
) -> tuple[str, ...]:
    """Remove configured parameters from request dict and return the dropped set."""

    if not drop_params:
        return tuple()

    dropped: list[str] = []
    for raw_key in drop_params:
        key = str(raw_key).strip()
        if not key:
            continue
        if key in request:
            request.pop(key, None)
            dropped.append(key)
    seen: set[str] = set()
    ordered_unique = [item for item in dropped if not (item in seen or seen.add(item))]
    return tuple(ordered_unique)


def extract_completion_text(response: object) -> str:
    """Return the first choice's message content from a LiteLLM response."""

    choices = getattr(response, "choices", None)
    if choices is None and isinstance(response, dict):
        choices = response.get("choices")
    if not choices:
        return ""
    first = choices[0]
    message = getattr(first, "message", None)
    if message is None and isinstance(first, dict):
        message = first.get("message")
    if message is None:
        return ""
    content = getattr(message, "content", None)
    if content is None and isinstance(message, dict):
        content = message.get("content")
    if isinstance(content, list):
        parts = [
            str(part.get("text", "")) if isinstance(part, dict) else str(part)
            for part in content
        ]
        content = "".join(parts)
    return str(content or "").strip()


def _detect_unsupported_parameters(
    message: str,
    parameters: Iterable[str],
    drop_candidates: Iterable[str] | None = None,
) -> set[str]:
    lowered = message.lower()
    indicators = (
        "not support",
        "unsupported",
        "not allowed",
        "additional property",
        "additional properties",
        "unexpected",
        "unknown",
    )
    if not any(token in lowered for token in indicators):
        return set()

    candidates = set(
        drop_candidates or {"max_tokens", "max_output_tokens", "temperature", "timeout"}
    )
    unsupported: set[str] = set()
    for key in parameters:
        if key not in candidates:
            continue
        key_forms = (key, key.replace("_", " "), key.replace("_", "-"))
        if any(form in lowered for form in key_forms):
            unsupported.add(key)
    return unsupported


__all__ = [
    "LiteLLMNotInstalledError",
    "apply_configured_drop_params",
    "call_completion_with_fallback",
    "extract_completion_text",
    "get_completion",
    "get_token_counter",
]
