"""Text utility helpers."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterator
import re

_NEWLINE_RE = re.compile(r"\r?\n")
_LF_RE = re.compile(r"\n")
_ASTRAL_RE = re.compile("[\U00010000-\U0010ffff]")
_LINE_RE = re.compile(r"(.*?)(\r?\n|\Z)", re.DOTALL)
_LINE_RANGE_RE = re.compile(r"^\s*(\d+)?\s*:\s*(\d+)?\s*$")


def split_lines(value: str) -> list[str]:
    """Split on LF or CRLF without keeping the separators."""
    return _NEWLINE_RE.split(value)


def iter_lines(value: str) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, line)`` for each line, offsets relative to ``value``."""
    for match in _LINE_RE.finditer(value):
        yield match.start(), match.group(1)
        if not match.group(2):
            return


def detect_eol(value: str) -> str:
    """Return the document's line ending, CRLF when any CRLF is present."""
    return "\r\n" if "\r\n" in value else "\n"


class OffsetIndex:
    """Line starts and astral-character positions of one document.

    Built once per document so that converting many offsets stays cheap on
    large scripts.
    """

    def __init__(self, value: str) -> None:
        self._line_starts = [0] + [match.end() for match in _LF_RE.finditer(value)]
        self._astral = [match.start() for match in _ASTRAL_RE.finditer(value)]

    def line_col(self, offset: int) -> tuple[int, int]:
        """Convert a string offset to a 1-based ``(line, column)`` pair."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def utf16(self, offset: int) -> int:
        """Convert a code-point offset to a UTF-16 code-unit offset."""
        return offset + bisect_left(self._astral, offset)


def parse_line_range(value: str) -> tuple[int | None, int | None]:
    """Parse ``A:B`` (1-based, inclusive, either side optional)."""
    match = _LINE_RANGE_RE.match(value)
    if match is None:
        raise ValueError(f"expected START:END, got {value!r}")
    first = int(match.group(1)) if match.group(1) else None
    last = int(match.group(2)) if match.group(2) else None
    if first is not None and first < 1:
        raise ValueError("line numbers start at 1")
    if first is not None and last is not None and last < first:
        raise ValueError(f"end line {last} is before start line {first}")
    return first, last


def line_span(value: str, first: int | None, last: int | None) -> tuple[int, int]:
    """Return document offsets covering lines ``first`` to ``last`` inclusive."""
    starts = [0] + [match.end() for match in _LF_RE.finditer(value)]
    first_index = (first or 1) - 1
    if first_index >= len(starts):
        return len(value), len(value)
    start = starts[first_index]
    if last is None or last >= len(starts):
        return start, len(value)
    return start, starts[last]
