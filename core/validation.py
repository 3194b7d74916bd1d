"""Input validation for prompt enhancement requests.

Updates:
  v0.1.1 - 2026-01-09 - Check the prompt upper bound against the raw length.
  v0.1.0 - 2025-12-12 - Extract validation rules from the enhancer.
"""

from __future__ import annotations

from .exceptions import ValidationError

MIN_PROMPT_LENGTH = 3
MAX_PROMPT_LENGTH = 2000
MAX_TARGET_LENGTH = 50


def validate_input(target: str, prompt: str) -> None:
    """Raise :class:`ValidationError` when *target* or *prompt* is malformed."""
    if not target or not isinstance(target, str):
        raise ValidationError("Target must be a non-empty string")
    if not target.strip():
        raise ValidationError("Target cannot be empty or whitespace only")
    if len(target) > MAX_TARGET_LENGTH:
        raise ValidationError(f"Target must not exceed {MAX_TARGET_LENGTH} characters")

    if not prompt or not isinstance(prompt, str):
        raise ValidationError("Prompt must be a non-empty string")
    trimmed = prompt.strip()
    if not trimmed:
        raise ValidationError("Prompt cannot be empty or whitespace only")
    if len(trimmed) < MIN_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt must be at least {MIN_PROMPT_LENGTH} characters long"
        )
    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(f"Prompt must not exceed {MAX_PROMPT_LENGTH} characters")


__all__ = [
    "MAX_PROMPT_LENGTH",
    "MAX_TARGET_LENGTH",
    "MIN_PROMPT_LENGTH",
    "validate_input",
]
