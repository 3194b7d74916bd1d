"""Argument parser for Prompt Enhancer CLI.

Updates:
  v0.2.0 - 2026-01-11 - Add history sub-commands and token reporting flag.
  v0.1.0 - 2025-12-13 - Add enhance, collections, and saved prompt sub-commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the Prompt Enhancer launcher."""
    parser = argparse.ArgumentParser(
        prog="prompt-enhancer",
        description="Rewrite prompts with a language model and keep them in local collections.",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including LiteLLM library logs.",
    )

    subparsers = parser.add_subparsers(dest="command")

    enhance_parser = subparsers.add_parser(
        "enhance",
        help="Rewrite a prompt for a target platform.",
    )
    enhance_parser.add_argument(
        "target",
        type=str,
        help="Target platform or tool (e.g. LinkedIn, Midjourney, ChatGPT).",
    )
    enhance_parser.add_argument(
        "prompt",
        type=str,
        help="Prompt text to enhance; use '-' to read it from stdin.",
    )
    enhance_parser.add_argument(
        "--save",
        action="store_true",
        help="Save the result to the target's default collection.",
    )
    enhance_parser.add_argument(
        "--collection",
        type=str,
        default=None,
        help="Save the result to this collection (id or name; created when missing).",
    )
    enhance_parser.add_argument(
        "--notes",
        type=str,
        default=None,
        help="Notes stored alongside a saved prompt.",
    )
    enhance_parser.add_argument(
        "--show-tokens",
        action="store_true",
        help="Report the token count and efficiency band of the enhanced prompt.",
    )
    enhance_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record the enhancement in the prompt history.",
    )

    collections_parser = subparsers.add_parser(
        "collections",
        help="Manage prompt collections.",
    )
    collections_sub = collections_parser.add_subparsers(dest="collections_command", required=True)
    collections_sub.add_parser("list", help="List collections with prompt counts.")
    create_parser = collections_sub.add_parser("create", help="Create a collection.")
    create_parser.add_argument("name", type=str, help="Collection name.")
    create_parser.add_argument("--description", type=str, default=None)
    create_parser.add_argument(
        "--color",
        type=str,
        default=None,
        help="Hex colour for the collection (defaults to #007AFF).",
    )
    rename_parser = collections_sub.add_parser("rename", help="Rename a collection.")
    rename_parser.add_argument("collection_id", type=str, help="Collection id.")
    rename_parser.add_argument("name", type=str, help="New collection name.")
    delete_collection_parser = collections_sub.add_parser(
        "delete",
        help="Delete a collection and every prompt saved in it.",
    )
    delete_collection_parser.add_argument("collection_id", type=str, help="Collection id.")

    saved_parser = subparsers.add_parser(
        "saved",
        help="Browse and organise saved prompts.",
    )
    saved_sub = saved_parser.add_subparsers(dest="saved_command", required=True)
    saved_list_parser = saved_sub.add_parser("list", help="List saved prompts, newest first.")
    saved_list_parser.add_argument(
        "--collection",
        dest="collection_id",
        type=str,
        default=None,
        help="Only list prompts in this collection id.",
    )
    saved_list_parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Only list prompts saved for this target.",
    )
    move_parser = saved_sub.add_parser("move", help="Move saved prompts to another collection.")
    move_parser.add_argument("prompt_ids", nargs="+", help="Saved prompt ids.")
    move_parser.add_argument(
        "--to",
        dest="collection_id",
        type=str,
        required=True,
        help="Destination collection id.",
    )
    saved_delete_parser = saved_sub.add_parser("delete", help="Delete saved prompts.")
    saved_delete_parser.add_argument("prompt_ids", nargs="+", help="Saved prompt ids.")

    history_parser = subparsers.add_parser(
        "history",
        help="Inspect recent enhancements.",
    )
    history_sub = history_parser.add_subparsers(dest="history_command", required=True)
    history_list_parser = history_sub.add_parser("list", help="List recent enhancements.")
    history_list_parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of entries to display (default: 10).",
    )
    history_sub.add_parser("clear", help="Delete every history entry.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Enhancer launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
