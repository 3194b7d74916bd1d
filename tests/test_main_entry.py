"""Lightweight integration checks for main module.

Updates:
  v0.2.1 - 2026-01-18 - Cover case-insensitive collection names and token bands per category.
  v0.2.0 - 2026-01-11 - Cover history commands and exit code mapping.
  v0.1.1 - 2025-12-20 - Cover --print-settings summary and masked API keys.
  v0.1.0 - 2025-12-13 - Cover enhance, collections, and saved prompt commands.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any, cast

import pytest

import main
from core.enhancer import PromptEnhancer
from core.exceptions import ModelCallError
from core.repository import PromptLibrary
from models.collection_model import CreateCollectionRequest
from models.saved_prompt_model import SavePromptRequest


class _EchoModel:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, system_prompt: str, user_prompt: str, cancel_event: Any = None) -> str:
        self.calls.append(user_prompt)
        return f"Enhanced: {user_prompt}"


class _FailingModel:
    def __call__(self, system_prompt: str, user_prompt: str, cancel_event: Any = None) -> str:
        raise ModelCallError("Rate limit exceeded", 429, True)


def _patch_main(monkeypatch: pytest.MonkeyPatch, name: str, value: object) -> None:
    monkeypatch.setattr(cast(Any, main), name, value)


@pytest.fixture
def db_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "cli.db"
    monkeypatch.setenv("PROMPT_ENHANCER_DB_PATH", str(path))
    return path


@pytest.fixture
def echo_model(monkeypatch: pytest.MonkeyPatch, db_path: Path) -> _EchoModel:
    model = _EchoModel()
    _patch_main(monkeypatch, "build_enhancer", lambda settings: PromptEnhancer(model))
    return model


def test_print_settings_masks_api_key(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("PROMPT_ENHANCER_LITELLM_API_KEY", "sk-1234567890abcd")

    assert main.main(["--print-settings"]) == 0

    output = capsys.readouterr().out
    assert "Prompt Enhancer configuration" in output
    assert "set (sk-1...abcd)" in output
    assert "sk-1234567890abcd" not in output
    assert str(db_path) in output


def test_missing_command_prints_help(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main([]) == 2
    assert "usage:" in capsys.readouterr().out


def test_invalid_settings_exit_with_validation_code(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PROMPT_ENHANCER_CACHE_TTL_SECONDS", "0")

    assert main.main(["history", "list"]) == 2


def test_enhance_prints_result_and_records_history(
    echo_model: _EchoModel,
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main.main(["enhance", "LinkedIn", "  share our launch  "]) == 0

    assert capsys.readouterr().out.strip() == "Enhanced: share our launch"
    assert echo_model.calls == ["share our launch"]
    with PromptLibrary(db_path) as library:
        entries = library.history.get_all()
        assert [(entry.original_prompt, entry.target) for entry in entries] == [
            ("share our launch", "LinkedIn")
        ]
        assert library.saved_prompts.get_all() == []


def test_enhance_no_history_skips_recording(echo_model: _EchoModel, db_path: Path) -> None:
    assert main.main(["enhance", "General", "hello", "--no-history"]) == 0

    with PromptLibrary(db_path) as library:
        assert library.history.get_all() == []


def test_enhance_save_uses_target_default_collection(
    echo_model: _EchoModel,
    db_path: Path,
) -> None:
    assert main.main(["enhance", "Midjourney", "a red fox", "--save"]) == 0
    assert main.main(["enhance", "Midjourney", "a blue fox", "--save"]) == 0

    with PromptLibrary(db_path) as library:
        collections = library.collections.get_all()
        assert [(c.name, c.is_default) for c in collections] == [("Midjourney", True)]
        assert library.saved_prompts.count_by_collection(collections[0].id) == 2


def test_enhance_into_named_collection_with_notes(
    echo_model: _EchoModel,
    db_path: Path,
) -> None:
    argv = ["enhance", "ChatGPT", "plan a trip", "--collection", "Travel", "--notes", "draft"]

    assert main.main(argv) == 0

    with PromptLibrary(db_path) as library:
        (collection,) = library.collections.get_all()
        assert collection.name == "Travel"
        assert collection.is_default is False
        (saved,) = library.saved_prompts.get_by_collection(collection.id)
        assert saved.notes == "draft"
        assert saved.enhanced_prompt == "Enhanced: plan a trip"


def test_enhance_reads_prompt_from_stdin(
    echo_model: _EchoModel,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("from stdin\n"))

    assert main.main(["enhance", "General", "-"]) == 0
    assert capsys.readouterr().out.strip() == "Enhanced: from stdin"


def test_enhance_show_tokens_reports_band(
    echo_model: _EchoModel,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("cli.commands.count_tokens", lambda text, model=None: 12)

    assert main.main(["enhance", "Sora", "a drone shot", "--show-tokens"]) == 0
    assert "Tokens: 12 (low)" in capsys.readouterr().out


def test_enhance_blank_prompt_exits_with_validation_code(echo_model: _EchoModel) -> None:
    assert main.main(["enhance", "LinkedIn", "   "]) == 2
    assert echo_model.calls == []


def test_enhance_model_failure_exits_with_enhancement_code(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _patch_main(monkeypatch, "build_enhancer", lambda settings: PromptEnhancer(_FailingModel()))

    assert main.main(["enhance", "LinkedIn", "hello"]) == 4
    with PromptLibrary(db_path) as library:
        assert library.history.get_all() == []


def test_collection_commands_round_trip(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main.main(["collections", "list"]) == 0
    assert "No collections yet." in capsys.readouterr().out

    assert main.main(["collections", "create", "Work", "--color", "#34C759"]) == 0
    with PromptLibrary(db_path) as library:
        (work,) = library.collections.get_all()

    assert main.main(["collections", "rename", work.id, "Office"]) == 0
    assert main.main(["collections", "list"]) == 0
    output = capsys.readouterr().out
    assert f"{work.id}  Office  #34C759  prompts=0" in output

    assert main.main(["collections", "delete", work.id]) == 0
    with PromptLibrary(db_path) as library:
        assert library.collections.get_all() == []


def test_collection_commands_report_missing_and_invalid(db_path: Path) -> None:
    assert main.main(["collections", "rename", "missing", "Name"]) == 3
    assert main.main(["collections", "delete", "missing"]) == 3
    assert main.main(["collections", "create", "   "]) == 2


def test_saved_commands_list_move_and_delete(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    with PromptLibrary(db_path) as library:
        source = library.collections.create(CreateCollectionRequest(name="Source"))
        destination = library.collections.create(CreateCollectionRequest(name="Destination"))
        saved = library.saved_prompts.save(
            SavePromptRequest(
                original_prompt="o",
                enhanced_prompt="an enhanced prompt",
                target="LinkedIn",
                collection_id=source.id,
            )
        )

    assert main.main(["saved", "list", "--target", "LinkedIn"]) == 0
    assert f"{saved.id}" in capsys.readouterr().out

    assert main.main(["saved", "move", saved.id, "--to", destination.id]) == 0
    assert main.main(["saved", "move", saved.id, "--to", "missing"]) == 3
    assert main.main(["saved", "list", "--collection", destination.id]) == 0
    assert "an enhanced prompt" in capsys.readouterr().out

    assert main.main(["saved", "delete", saved.id]) == 0
    capsys.readouterr()
    assert main.main(["saved", "list"]) == 0
    assert "No saved prompts." in capsys.readouterr().out


def test_history_commands(
    echo_model: _EchoModel,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main.main(["enhance", "LinkedIn", "first"]) == 0
    assert main.main(["enhance", "LinkedIn", "second"]) == 0
    capsys.readouterr()

    assert main.main(["history", "list", "--limit", "1"]) == 0
    output = capsys.readouterr().out
    assert "second -> Enhanced: second" in output
    assert "first ->" not in output

    assert main.main(["history", "list", "--limit", "0"]) == 2

    assert main.main(["history", "clear"]) == 0
    capsys.readouterr()
    assert main.main(["history", "list"]) == 0
    assert "History is empty." in capsys.readouterr().out


def test_collection_create_rejects_duplicate_name_ignoring_case(db_path: Path) -> None:
    assert main.main(["collections", "create", "Work"]) == 0
    assert main.main(["collections", "create", "work"]) == 2
    assert main.main(["collections", "create", "  WORK "]) == 2

    with PromptLibrary(db_path) as library:
        assert [collection.name for collection in library.collections.get_all()] == ["Work"]


def test_collection_rename_rejects_name_of_another_collection(db_path: Path) -> None:
    with PromptLibrary(db_path) as library:
        work = library.collections.create(CreateCollectionRequest(name="Work"))
        home = library.collections.create(CreateCollectionRequest(name="Home"))

    assert main.main(["collections", "rename", home.id, "WORK"]) == 2
    assert main.main(["collections", "rename", work.id, "WORK"]) == 0

    with PromptLibrary(db_path) as library:
        names = {collection.id: collection.name for collection in library.collections.get_all()}
    assert names == {work.id: "WORK", home.id: "Home"}


def test_enhance_collection_selector_matches_name_ignoring_case(
    echo_model: _EchoModel,
    db_path: Path,
) -> None:
    with PromptLibrary(db_path) as library:
        work = library.collections.create(CreateCollectionRequest(name="Work"))

    assert main.main(["enhance", "ChatGPT", "plan the sprint", "--collection", "work"]) == 0

    with PromptLibrary(db_path) as library:
        assert [collection.id for collection in library.collections.get_all()] == [work.id]
        assert library.saved_prompts.count_by_collection(work.id) == 1


@pytest.mark.parametrize(
    ("target", "tokens", "band"),
    [
        ("Midjourney", 300, "medium"),
        ("Sora", 450, "high"),
        ("LinkedIn", 300, "low"),
    ],
)
def test_enhance_show_tokens_bands_by_resolved_category(
    echo_model: _EchoModel,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    target: str,
    tokens: int,
    band: str,
) -> None:
    monkeypatch.setattr("cli.commands.count_tokens", lambda text, model=None: tokens)

    assert main.main(["enhance", target, "a quiet harbour at dawn", "--show-tokens"]) == 0
    assert f"Tokens: {tokens} ({band})" in capsys.readouterr().out
