"""End-to-end flow from enhancement through saving and cleanup.

Updates: v0.1.0 - 2026-01-11 - Cover enhance, save, count, and cascade delete.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.enhancer import PromptEnhancer
from core.repository import PromptLibrary
from models.collection_model import CreateCollectionRequest
from models.history_model import SavePromptHistoryRequest
from models.saved_prompt_model import SavePromptRequest

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from conftest import RecordingModel


def test_enhance_save_and_delete_collection(
    library: PromptLibrary,
    enhancer: PromptEnhancer,
    recording_model: RecordingModel,
) -> None:
    enhanced = enhancer.enhance("LinkedIn", "  write about our launch  ")
    assert enhanced == "Enhanced: write about our launch"
    assert len(recording_model.calls) == 1

    work = library.collections.create(CreateCollectionRequest(name="Work"))
    library.saved_prompts.save(
        SavePromptRequest(
            original_prompt="write about our launch",
            enhanced_prompt=enhanced,
            target="LinkedIn",
            collection_id=work.id,
        )
    )
    library.history.save(
        SavePromptHistoryRequest(
            original_prompt="write about our launch",
            enhanced_prompt=enhanced,
            target="LinkedIn",
        )
    )

    counts = {entry.id: entry.prompt_count for entry in library.collections.get_all_with_counts()}
    assert counts == {work.id: 1}

    library.collections.delete(work.id)

    assert library.saved_prompts.get_all() == []
    assert library.collections.get_all() == []
    assert len(library.history.get_all()) == 1


def test_repeat_enhancement_is_served_from_cache(
    enhancer: PromptEnhancer,
    recording_model: RecordingModel,
) -> None:
    first = enhancer.enhance("Midjourney", "a lighthouse at dusk")
    second = enhancer.enhance("midjourney", "a lighthouse at dusk ")

    assert first == second
    assert len(recording_model.calls) == 1
