"""Shorthand escape substitutions applied before formatting."""

from __future__ import annotations

from collections.abc import Callable
import re
from typing import Final

_Replacement = str | Callable[[re.Match[str]], str]

# Order matters: no later pattern may match an earlier substitution's output.
ESCAPE_SUBSTITUTIONS: Final[tuple[tuple[re.Pattern[str], _Replacement], ...]] = (
    (re.compile(r"\$"), "¥"),
    (re.compile(r"\\e"), "é"),
    (re.compile(r"\\\."), "…"),
    (re.compile(r"\\au"), "{UP_ARROW}"),
    (re.compile(r"\\ad"), "{DOWN_ARROW}"),
    (re.compile(r"\\ar"), "{RIGHT_ARROW}"),
    (re.compile(r"\\al"), "{LEFT_ARROW}"),
    (re.compile(r"\\m"), "♂"),
    (re.compile(r"\\f"), "♀"),
    (re.compile(r"\\qo"), "“"),
    (re.compile(r"\\qc"), "”"),
    (re.compile(r"\\h(\d+)"), lambda match: f"{{PAUSE_{match.group(1)}}}"),
)


def normalize_escapes(text: str) -> str:
    """Expand author shorthands such as ``\\e`` and ``\\h30`` into game text."""
    for pattern, replacement in ESCAPE_SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text
