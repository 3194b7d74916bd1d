"""Tests for the LiteLLM model collaborator.

Updates:
  v0.2.1 - 2026-01-18 - Cover cancellation while an empty response is being retried.
  v0.2.0 - 2026-01-15 - Cover cancellation before and between attempts.
  v0.1.0 - 2025-12-13 - Cover request shaping, retries, and error mapping.
"""

from __future__ import annotations

import threading
from typing import Any

import pytest

from core.exceptions import ModelCallError
from core.model_client import ABORTED_STATUS_CODE, LiteLLMModelClient


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _response(text: str) -> dict[str, Any]:
    return {"choices": [{"message": {"content": text}}]}


def _install_completion(monkeypatch: pytest.MonkeyPatch, completion: Any) -> None:
    monkeypatch.setattr(
        "core.model_client.get_completion",
        lambda: (completion, Exception),
    )


def _client(**overrides: Any) -> LiteLLMModelClient:
    params: dict[str, Any] = {"model": "gpt-4o-mini", "retry_delay_seconds": 0}
    params.update(overrides)
    return LiteLLMModelClient(**params)


def test_call_builds_chat_request(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[dict[str, Any]] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        captured.append(kwargs)
        return _response("  Rewritten prompt  ")

    _install_completion(monkeypatch, _fake_completion)
    client = _client(api_key="sk-test", timeout_seconds=12.5)

    result = client("system text", "user text")

    assert result == "Rewritten prompt"
    request = captured[0]
    assert request["model"] == "gpt-4o-mini"
    assert request["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert request["max_tokens"] == 500
    assert request["temperature"] == pytest.approx(0.7)
    assert request["api_key"] == "sk-test"
    assert request["timeout"] == pytest.approx(12.5)
    assert "api_base" not in request


def test_configured_drop_params_are_removed(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[dict[str, Any]] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        captured.append(kwargs)
        return _response("ok")

    _install_completion(monkeypatch, _fake_completion)

    _client(drop_params=["temperature"])("s", "u")

    assert "temperature" not in captured[0]


def test_unsupported_parameter_is_dropped_and_request_retried(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: list[dict[str, Any]] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        captured.append(kwargs)
        if "temperature" in kwargs:
            raise ValueError("temperature is not supported for this model")
        return _response("ok")

    _install_completion(monkeypatch, _fake_completion)

    assert _client()("s", "u") == "ok"
    assert len(captured) == 2
    assert "temperature" not in captured[1]


def test_empty_response_is_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    replies = iter(["", "second try"])
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        return _response(next(replies))

    _install_completion(monkeypatch, _fake_completion)

    assert _client()("s", "u") == "second try"
    assert len(calls) == 2


def test_empty_responses_exhaust_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        return _response("")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError, match="empty response") as excinfo:
        _client(retry_attempts=2)("s", "u")
    assert excinfo.value.status_code == 500
    assert len(calls) == 3


def test_rate_limit_is_retried_then_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        raise _StatusError("Too many requests", 429)

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client(retry_attempts=2)("s", "u")
    assert excinfo.value.status_code == 429
    assert excinfo.value.retryable is True
    assert str(excinfo.value).startswith("Model API error")
    assert len(calls) == 3


def test_client_error_is_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        raise _StatusError("Invalid API key", 401)

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client()("s", "u")
    assert excinfo.value.status_code == 401
    assert excinfo.value.retryable is False
    assert len(calls) == 1


def test_network_error_is_retried_and_mapped_to_503(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        raise RuntimeError("Network is unreachable")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError, match="Network error after 2 attempts") as excinfo:
        _client(retry_attempts=1)("s", "u")
    assert excinfo.value.status_code == 503
    assert len(calls) == 2


def test_unexpected_error_is_mapped_without_retry(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        raise KeyError("choices")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError, match="Unexpected error calling model") as excinfo:
        _client()("s", "u")
    assert excinfo.value.status_code == 500
    assert len(calls) == 1


def test_missing_model_raises_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_completion(**kwargs: Any) -> dict[str, Any]:  # pragma: no cover - not reached
        raise AssertionError("completion must not be called")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client(model=None)("s", "u")
    assert excinfo.value.status_code == 500
    assert excinfo.value.retryable is False


def test_cancelled_request_is_not_sent(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        return _response("ok")

    _install_completion(monkeypatch, _fake_completion)
    event = threading.Event()
    event.set()

    with pytest.raises(ModelCallError) as excinfo:
        _client()("s", "u", event)
    assert excinfo.value.status_code == ABORTED_STATUS_CODE
    assert calls == []


def test_cancellation_during_attempt_stops_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    event = threading.Event()
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        event.set()
        raise _StatusError("Service unavailable", 503)

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client(retry_attempts=3)("s", "u", event)
    assert excinfo.value.status_code == ABORTED_STATUS_CODE
    assert len(calls) == 1


def test_cancellation_after_response_discards_result(monkeypatch: pytest.MonkeyPatch) -> None:
    event = threading.Event()

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        event.set()
        return _response("too late")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client()("s", "u", event)
    assert excinfo.value.status_code == ABORTED_STATUS_CODE


def test_cancellation_during_empty_response_reports_abort(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    event = threading.Event()
    calls: list[int] = []

    def _fake_completion(**kwargs: Any) -> dict[str, Any]:
        calls.append(1)
        event.set()
        return _response("   ")

    _install_completion(monkeypatch, _fake_completion)

    with pytest.raises(ModelCallError) as excinfo:
        _client(retry_attempts=2)("s", "u", event)
    assert excinfo.value.status_code == ABORTED_STATUS_CODE
    assert excinfo.value.retryable is False
    assert len(calls) == 1
