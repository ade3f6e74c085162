"""Debug logging switches."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

DEBUG_ENV_VAR = "PORYTEXT_DEBUG"
LOGGER = logging.getLogger("porytext")


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip() == "1"


def debug_log(message: str, *args: object) -> None:
    """Emit debug logs to stderr in debug mode only.

    Debug mode is the logger level chosen by ``configure_logging``.
    """
    LOGGER.debug(message, *args)


def configure_logging(debug: bool = False) -> None:
    """Route package logs through rich on stderr."""
    level = logging.DEBUG if debug or debug_enabled() else logging.WARNING
    if not any(isinstance(handler, RichHandler) for handler in LOGGER.handlers):
        LOGGER.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        )
    LOGGER.setLevel(level)
