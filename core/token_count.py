"""Token counting and efficiency bands for enhanced prompts.

Updates:
  v0.1.0 - 2026-01-10 - Count tokens via LiteLLM with per-category thresholds.
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum
from typing import Literal

from .litellm_adapter import get_token_counter

logger = logging.getLogger("prompt_enhancer.tokens")

DEFAULT_TOKENIZER_MODEL = "gpt-4o-mini"

TokenEfficiency = Literal["low", "medium", "high"]


class ThresholdCategory(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


# Green below LOW, yellow between LOW and HIGH, red above HIGH.
CATEGORY_THRESHOLDS: dict[ThresholdCategory, tuple[int, int]] = {
    ThresholdCategory.TEXT: (1000, 4000),
    ThresholdCategory.IMAGE: (250, 600),
    ThresholdCategory.VIDEO: (150, 400),
}


def threshold_category(target: str | None) -> ThresholdCategory:
    """Map a target label or category slug onto a threshold band."""
    normalized = (target or "").lower()
    if "image" in normalized:
        return ThresholdCategory.IMAGE
    if "video" in normalized:
        return ThresholdCategory.VIDEO
    return ThresholdCategory.TEXT


def count_tokens(text: str, model: str = DEFAULT_TOKENIZER_MODEL) -> int:
    """Return the token count of *text*, estimating when the tokenizer fails."""
    if not text or not text.strip():
        return 0
    try:
        counter = get_token_counter()
        return int(counter(model=model, text=text))  # type: ignore[arg-type]
    except Exception as exc:  # noqa: BLE001 - tokenizer failures fall back to an estimate
        logger.warning("Failed to count tokens, using length estimate: %s", exc)
        return math.ceil(len(text) / 4)


def token_efficiency(
    token_count: int,
    category: ThresholdCategory = ThresholdCategory.TEXT,
) -> TokenEfficiency:
    """Classify *token_count* against the thresholds for *category*."""
    low, high = CATEGORY_THRESHOLDS[category]
    if token_count <= low:
        return "low"
    if token_count <= high:
        return "medium"
    return "high"


__all__ = [
    "CATEGORY_THRESHOLDS",
    "ThresholdCategory",
    "TokenEfficiency",
    "count_tokens",
    "threshold_category",
    "token_efficiency",
]
