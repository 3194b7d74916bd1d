"""Tests for the collection repository.

Updates:
  v0.2.0 - 2026-01-09 - Cover prompt counts and default-collection lookup.
  v0.1.0 - 2025-12-13 - Cover creation order, updates, and cascade delete.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.exceptions import NotFoundError
from core.repository import PromptLibrary, RepositoryNotFoundError
from models.collection_model import (
    DEFAULT_COLLECTION_COLOR,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)
from models.saved_prompt_model import SavePromptRequest


def _save(library: PromptLibrary, collection_id: str, text: str = "o") -> str:
    prompt = library.saved_prompts.save(
        SavePromptRequest(
            original_prompt=text,
            enhanced_prompt=f"{text} enhanced",
            target="General",
            collection_id=collection_id,
        )
    )
    return prompt.id


def test_create_assigns_defaults(library: PromptLibrary) -> None:
    collection = library.collections.create(CreateCollectionRequest(name="Work"))

    assert collection.id
    assert collection.name == "Work"
    assert collection.color == DEFAULT_COLLECTION_COLOR
    assert collection.is_default is False
    assert collection.sort_order == 0
    assert collection.created_at == collection.updated_at
    assert library.collections.get_by_id(collection.id) == collection


def test_sort_order_is_strictly_increasing_in_creation_order(library: PromptLibrary) -> None:
    names = ["A", "B", "C"]
    for name in names:
        library.collections.create(CreateCollectionRequest(name=name))

    collections = library.collections.get_all()

    assert [collection.name for collection in collections] == names
    assert [collection.sort_order for collection in collections] == [0, 1, 2]


def test_sort_order_is_not_reused_after_deleting_the_last_but_one(
    library: PromptLibrary,
) -> None:
    first = library.collections.create(CreateCollectionRequest(name="A"))
    library.collections.create(CreateCollectionRequest(name="B"))
    library.collections.delete(first.id)

    created = library.collections.create(CreateCollectionRequest(name="C"))

    assert created.sort_order == 2


def test_get_by_id_returns_none_for_unknown_id(library: PromptLibrary) -> None:
    assert library.collections.get_by_id("missing") is None


def test_update_merges_fields_and_touches_timestamp(library: PromptLibrary) -> None:
    created = library.collections.create(
        CreateCollectionRequest(name="Work", description="Day job", color="#34C759")
    )

    updated = library.collections.update(created.id, UpdateCollectionRequest(name="Office"))

    assert updated.name == "Office"
    assert updated.description == "Day job"
    assert updated.color == "#34C759"
    assert updated.sort_order == created.sort_order
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert library.collections.get_by_id(created.id) == updated


def test_update_missing_collection_raises_not_found(library: PromptLibrary) -> None:
    with pytest.raises(RepositoryNotFoundError) as excinfo:
        library.collections.update("missing", UpdateCollectionRequest(name="x"))
    assert isinstance(excinfo.value, NotFoundError)


def test_update_sort_order_reorders_listing(library: PromptLibrary) -> None:
    a = library.collections.create(CreateCollectionRequest(name="A"))
    library.collections.create(CreateCollectionRequest(name="B"))

    library.collections.update(a.id, UpdateCollectionRequest(sort_order=10))

    assert [collection.name for collection in library.collections.get_all()] == ["B", "A"]


def test_delete_cascades_to_saved_prompts(library: PromptLibrary) -> None:
    doomed = library.collections.create(CreateCollectionRequest(name="X"))
    kept = library.collections.create(CreateCollectionRequest(name="Y"))
    _save(library, doomed.id, "one")
    _save(library, doomed.id, "two")
    kept_prompt = _save(library, kept.id, "three")

    library.collections.delete(doomed.id)

    assert library.collections.get_by_id(doomed.id) is None
    assert library.saved_prompts.get_by_collection(doomed.id) == []
    assert [prompt.id for prompt in library.saved_prompts.get_all()] == [kept_prompt]


def test_delete_missing_collection_is_a_no_op(library: PromptLibrary) -> None:
    library.collections.delete("missing")
    assert library.collections.get_all() == []


def test_get_all_with_counts(library: PromptLibrary) -> None:
    busy = library.collections.create(CreateCollectionRequest(name="Busy"))
    empty = library.collections.create(CreateCollectionRequest(name="Empty"))
    _save(library, busy.id)
    _save(library, busy.id)

    counts = {entry.id: entry.prompt_count for entry in library.collections.get_all_with_counts()}

    assert counts == {busy.id: 2, empty.id: 0}


def test_get_or_create_default_is_idempotent_per_name(library: PromptLibrary) -> None:
    first = library.collections.get_or_create_default("ChatGPT")
    second = library.collections.get_or_create_default("ChatGPT")
    other = library.collections.get_or_create_default("Midjourney")

    assert first.id == second.id
    assert first.is_default is True
    assert other.id != first.id
    assert len(library.collections.get_all()) == 2


def test_get_or_create_default_ignores_non_default_namesakes(library: PromptLibrary) -> None:
    manual = library.collections.create(CreateCollectionRequest(name="ChatGPT"))

    default = library.collections.get_or_create_default("ChatGPT")

    assert default.id != manual.id
    assert default.is_default is True


def test_collections_persist_across_library_instances(tmp_path: Path) -> None:
    db_path = tmp_path / "persist.db"
    with PromptLibrary(db_path) as library:
        created = library.collections.create(CreateCollectionRequest(name="Kept"))

    with PromptLibrary(db_path) as reopened:
        assert reopened.collections.get_by_id(created.id) == created
