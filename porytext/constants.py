"""Constants used across pyporytext."""

from __future__ import annotations

from typing import Final

RAW_FUNCTION: Final[str] = "fmsgbox"
FORMATTED_FUNCTION: Final[str] = "msgbox"
VALIDATED_FUNCTIONS: Final[tuple[str, ...]] = (
    "fmsgbox",
    "msgbox",
    "format",
    "message",
)

ESCAPE_NEWLINE: Final[str] = "\\n"
ESCAPE_LINE: Final[str] = "\\l"
ESCAPE_PARAGRAPH: Final[str] = "\\p"
ESCAPE_CODE_LENGTH: Final[int] = 2

CONTENT_INDENT: Final[str] = "    "

DEFAULT_ENABLED: Final[bool] = True
DEFAULT_MAX_LINE_LENGTH: Final[int] = 208
DEFAULT_VALID_COLOR: Final[str] = "#0072B2"
DEFAULT_WARNING_COLOR: Final[str] = "#E69F00"

PORY_SUFFIX: Final[str] = ".pory"
CONFIG_FILE_NAME: Final[str] = "porytext.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[str] = "porytext"

DEFAULT_WATCH_INTERVAL_SECONDS: Final[float] = 0.5
