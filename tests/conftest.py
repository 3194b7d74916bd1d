"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-01-11 - Provide manual clock, recording model, and library fixtures.
  v0.1.0 - 2025-12-13 - Isolate settings sources from the developer environment.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from core.enhancer import PromptEnhancer
from core.repository import PromptLibrary


class ManualClock:
    """Deterministic epoch-millisecond clock advanced by each call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        current = self.now
        self.now += self.step
        return current


class RecordingModel:
    """Model collaborator that records calls and returns a canned rewrite."""

    def __init__(self, reply: str | None = None) -> None:
        self.reply = reply
        self.calls: list[tuple[str, str, threading.Event | None]] = []

    def __call__(
        self,
        system_prompt: str,
        user_prompt: str,
        cancel_event: threading.Event | None = None,
    ) -> str:
        self.calls.append((system_prompt, user_prompt, cancel_event))
        if self.reply is not None:
            return self.reply
        return f"Enhanced: {user_prompt}"


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings resolution."""
    for name in list(os.environ):
        upper = name.upper()
        if upper.startswith(("PROMPT_ENHANCER_", "LITELLM_")) or upper in {
            "OPENAI_API_KEY",
            "OPENAI_API_BASE",
            "DB_PATH",
            "DATABASE_PATH",
            "REDIS_DSN",
            "CACHE_TTL_SECONDS",
            "HISTORY_LIMIT",
            "REQUEST_TIMEOUT_SECONDS",
        }:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PROMPT_ENHANCER_ENV_FILE", "")


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def library(tmp_path: Path, clock: ManualClock) -> Iterator[PromptLibrary]:
    lib = PromptLibrary(tmp_path / "library.db", clock=clock)
    try:
        yield lib
    finally:
        lib.close()


@pytest.fixture
def recording_model() -> RecordingModel:
    return RecordingModel()


@pytest.fixture
def enhancer(recording_model: RecordingModel) -> PromptEnhancer:
    return PromptEnhancer(recording_model)
