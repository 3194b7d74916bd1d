"""Application entry point for Prompt Enhancer.

Updates:
  v0.2.0 - 2026-01-11 - Map domain errors onto distinct exit codes.
  v0.1.1 - 2025-12-20 - Apply LiteLLM logging toggle from --verbose.
  v0.1.0 - 2025-12-13 - Wire settings, library, enhancer, and CLI commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS, EXIT_VALIDATION, CliServices, exit_code_for
from cli.parser import build_parser
from cli.runtime import configure_litellm_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import build_enhancer, build_library
from core.exceptions import PromptEnhancerError

if TYPE_CHECKING:
    from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.logging_config, verbose=args.verbose)

    logger = logging.getLogger("prompt_enhancer.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return EXIT_VALIDATION

    configure_litellm_logging(args.verbose)
    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS.get(args.command)
    if spec is None:
        parser.print_help()
        return EXIT_VALIDATION

    library = build_library(settings)
    try:
        enhancer = build_enhancer(settings) if spec.requires_enhancer else None
        services = CliServices(settings=settings, library=library, enhancer=enhancer)
        return spec.handler(services, args, logger)
    except PromptEnhancerError as exc:
        logger.error("%s", exc)
        return exit_code_for(exc)
    finally:
        library.close()


if __name__ == "__main__":
    raise SystemExit(main())
