"""Runtime boot helpers for Prompt Enhancer CLI.

Updates:
  v0.1.1 - 2025-12-20 - Add LiteLLM logging toggle helper.
  v0.1.0 - 2025-12-13 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None, *, verbose: bool = False) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except Exception as exc:  # noqa: BLE001 - fall back to basic configuration
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            logging.getLogger("prompt_enhancer.cli").warning(
                "Unable to apply logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def configure_litellm_logging(enabled: bool) -> None:
    """Enable or disable upstream LiteLLM library logs."""
    litellm_loggers = (
        logging.getLogger("litellm"),
        logging.getLogger("LiteLLM"),
        logging.getLogger("LiteLLM Router"),
    )
    for litellm_logger in litellm_loggers:
        litellm_logger.propagate = True
        if enabled:
            litellm_logger.disabled = False
            litellm_logger.setLevel(logging.NOTSET)
        else:
            litellm_logger.disabled = True
            litellm_logger.setLevel(logging.CRITICAL)


__all__ = ["configure_litellm_logging", "setup_logging"]
