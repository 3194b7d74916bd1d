"""CLI command handlers for Prompt Enhancer.

Updates:
  v0.2.1 - 2026-01-18 - Reject case-insensitive duplicate collection names; band tokens by category.
  v0.2.0 - 2026-01-11 - Record enhancements in history and add history commands.
  v0.1.0 - 2025-12-13 - Add enhance, collection, and saved prompt handlers.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.cache import EnhancementCacheError
from core.exceptions import (
    EnhancementError,
    ModelCallError,
    NotFoundError,
    PromptEnhancerError,
    ValidationError,
)
from core.repository import RepositoryError, RepositoryNotFoundError
from core.token_count import count_tokens, threshold_category, token_efficiency
from core.tool_categories import resolve_category
from models.collection_model import CreateCollectionRequest, UpdateCollectionRequest
from models.history_model import SavePromptHistoryRequest
from models.saved_prompt_model import SavePromptRequest

from .utils import format_timestamp, print_and_log, shorten

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptEnhancerSettings
    from core.enhancer import PromptEnhancer
    from core.repository import PromptLibrary
    from models.collection_model import Collection

EXIT_OK = 0
EXIT_VALIDATION = 2
EXIT_NOT_FOUND = 3
EXIT_ENHANCEMENT = 4
EXIT_STORAGE = 5


@dataclass(slots=True)
class CliServices:
    """Services shared by command handlers for one CLI invocation."""

    settings: PromptEnhancerSettings
    library: PromptLibrary
    enhancer: PromptEnhancer | None = None

    def require_enhancer(self) -> PromptEnhancer:
        if self.enhancer is None:
            raise RuntimeError("Prompt enhancer is required for this command.")
        return self.enhancer


CommandHandler = Callable[[CliServices, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_enhancer: bool = False


def exit_code_for(exc: PromptEnhancerError) -> int:
    """Map a domain exception onto the CLI exit code."""
    if isinstance(exc, ValidationError):
        return EXIT_VALIDATION
    if isinstance(exc, NotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(exc, (ModelCallError, EnhancementError)):
        return EXIT_ENHANCEMENT
    if isinstance(exc, (RepositoryError, EnhancementCacheError)):
        return EXIT_STORAGE
    return EXIT_ENHANCEMENT


def _read_prompt(value: str) -> str:
    if value == "-":
        return sys.stdin.read()
    return value


def _find_collection_by_name(
    library: PromptLibrary,
    name: str,
    *,
    exclude_id: str | None = None,
) -> Collection | None:
    """Return the collection whose name matches *name* ignoring case."""
    wanted = name.strip().casefold()
    for collection in library.collections.get_all():
        if collection.id != exclude_id and collection.name.strip().casefold() == wanted:
            return collection
    return None


def _ensure_unique_name(
    library: PromptLibrary,
    name: str,
    *,
    exclude_id: str | None = None,
) -> None:
    existing = _find_collection_by_name(library, name, exclude_id=exclude_id)
    if existing is not None:
        raise ValidationError(f"A collection named '{existing.name}' already exists")


def _resolve_collection(library: PromptLibrary, selector: str | None, target: str) -> Collection:
    """Return the collection named or identified by *selector*, or the target default."""
    if selector is None:
        return library.collections.get_or_create_default(target)
    by_id = library.collections.get_by_id(selector)
    if by_id is not None:
        return by_id
    name = selector.strip()
    if not name:
        raise ValidationError("Collection name cannot be empty")
    by_name = _find_collection_by_name(library, name)
    if by_name is not None:
        return by_name
    return library.collections.create(CreateCollectionRequest(name=name))


def _require_collection(library: PromptLibrary, collection_id: str) -> Collection:
    collection = library.collections.get_by_id(collection_id)
    if collection is None:
        raise RepositoryNotFoundError(f"Collection {collection_id} not found")
    return collection


def run_enhance(services: CliServices, args: argparse.Namespace, logger: logging.Logger) -> int:
    enhancer = services.require_enhancer()
    library = services.library
    prompt = _read_prompt(args.prompt)
    enhanced = enhancer.enhance(args.target, prompt)
    print(enhanced)

    if args.show_tokens:
        tokens = count_tokens(enhanced, model=services.settings.litellm_model or "gpt-4o-mini")
        band = token_efficiency(tokens, threshold_category(resolve_category(args.target).value))
        print(f"\nTokens: {tokens} ({band})")

    original = prompt.strip()
    target = args.target.strip()
    if not args.no_history:
        library.history.save(
            SavePromptHistoryRequest(
                original_prompt=original,
                enhanced_prompt=enhanced,
                target=target,
            )
        )
    if args.save or args.collection:
        collection = _resolve_collection(library, args.collection, target)
        saved = library.saved_prompts.save(
            SavePromptRequest(
                original_prompt=original,
                enhanced_prompt=enhanced,
                target=target,
                collection_id=collection.id,
                notes=args.notes,
            )
        )
        print_and_log(
            logger,
            logging.INFO,
            f"Saved prompt {saved.id} to collection '{collection.name}'",
        )
    return EXIT_OK


def run_collections(services: CliServices, args: argparse.Namespace, logger: logging.Logger) -> int:
    collections = services.library.collections
    action = args.collections_command
    if action == "list":
        entries = collections.get_all_with_counts()
        if not entries:
            print("No collections yet.")
            return EXIT_OK
        for entry in entries:
            marker = " [default]" if entry.is_default else ""
            print(f"{entry.id}  {entry.name}{marker}  {entry.color}  prompts={entry.prompt_count}")
        return EXIT_OK
    if action == "create":
        name = args.name.strip()
        if not name:
            raise ValidationError("Collection name cannot be empty")
        _ensure_unique_name(services.library, name)
        created = collections.create(
            CreateCollectionRequest(name=name, description=args.description, color=args.color)
        )
        print_and_log(logger, logging.INFO, f"Created collection {created.id} ({created.name})")
        return EXIT_OK
    if action == "rename":
        name = args.name.strip()
        if not name:
            raise ValidationError("Collection name cannot be empty")
        _require_collection(services.library, args.collection_id)
        _ensure_unique_name(services.library, name, exclude_id=args.collection_id)
        updated = collections.update(args.collection_id, UpdateCollectionRequest(name=name))
        print_and_log(logger, logging.INFO, f"Renamed collection {updated.id} to {updated.name}")
        return EXIT_OK
    if action == "delete":
        _require_collection(services.library, args.collection_id)
        collections.delete(args.collection_id)
        print_and_log(logger, logging.INFO, f"Deleted collection {args.collection_id}")
        return EXIT_OK
    raise ValueError(f"Unknown collections command: {action}")


def run_saved(services: CliServices, args: argparse.Namespace, logger: logging.Logger) -> int:
    library = services.library
    saved_prompts = library.saved_prompts
    action = args.saved_command
    if action == "list":
        if args.collection_id:
            prompts = saved_prompts.get_by_collection(args.collection_id)
        elif args.target:
            prompts = saved_prompts.get_by_target(args.target)
        else:
            prompts = saved_prompts.get_all()
        if not prompts:
            print("No saved prompts.")
            return EXIT_OK
        for prompt in prompts:
            print(
                f"{prompt.id}  {format_timestamp(prompt.created_at)}  [{prompt.target}]  "
                f"{shorten(prompt.enhanced_prompt)}"
            )
        return EXIT_OK
    if action == "move":
        destination = _require_collection(library, args.collection_id)
        saved_prompts.bulk_move(args.prompt_ids, destination.id)
        print_and_log(
            logger,
            logging.INFO,
            f"Moved {len(args.prompt_ids)} prompt(s) to collection '{destination.name}'",
        )
        return EXIT_OK
    if action == "delete":
        saved_prompts.bulk_delete(args.prompt_ids)
        print_and_log(logger, logging.INFO, f"Deleted {len(args.prompt_ids)} prompt(s)")
        return EXIT_OK
    raise ValueError(f"Unknown saved command: {action}")


def run_history(services: CliServices, args: argparse.Namespace, logger: logging.Logger) -> int:
    history = services.library.history
    action = args.history_command
    if action == "list":
        if args.limit <= 0:
            raise ValidationError("--limit must be greater than zero")
        entries = history.get_all()[: args.limit]
        if not entries:
            print("History is empty.")
            return EXIT_OK
        for entry in entries:
            print(
                f"{format_timestamp(entry.timestamp)}  [{entry.target}]  "
                f"{shorten(entry.original_prompt, 30)} -> {shorten(entry.enhanced_prompt)}"
            )
        return EXIT_OK
    if action == "clear":
        history.clear()
        print_and_log(logger, logging.INFO, "Prompt history cleared")
        return EXIT_OK
    raise ValueError(f"Unknown history command: {action}")


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "enhance": CommandSpec(run_enhance, requires_enhancer=True),
    "collections": CommandSpec(run_collections),
    "saved": CommandSpec(run_saved),
    "history": CommandSpec(run_history),
}


__all__ = [
    "COMMAND_SPECS",
    "CliServices",
    "CommandSpec",
    "EXIT_ENHANCEMENT",
    "EXIT_NOT_FOUND",
    "EXIT_OK",
    "EXIT_STORAGE",
    "EXIT_VALIDATION",
    "exit_code_for",
]
