"""Pixel widths for the in-game message box font."""

from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType
from typing import Final

from .model import WidthSpan

# Emerald 1_latin_rse font.
DEFAULT_CHAR_WIDTH: Final[int] = 6

_ACCENTED = "ÀÁÂÇÈÉÊËÌÎÏÒÓÔÙÚÛÑßàáçèéêëìîïòóôùúûñºª"

CHARACTER_WIDTHS: Final = MappingProxyType(
    {
        " ": 3,
        **{char: 6 for char in _ACCENTED},
        "Œ": 8,
        "œ": 8,
        # Placeholder widths are estimates of the substituted value.
        "{PLAYER}": 48,
        "{RIVAL}": 42,
        "{STR_VAR_1}": 60,
        "{STR_VAR_2}": 60,
        "{STR_VAR_3}": 60,
        "{PKMN}": 30,
        "{POKEMON}": 48,
        "{LV}": 12,
    }
)


def width_of(token: str) -> int:
    """Return the pixel width of a character or ``{PLACEHOLDER}`` token."""
    return CHARACTER_WIDTHS.get(token, DEFAULT_CHAR_WIDTH)


def tokenize(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, token)`` triples, treating ``{...}`` as one token."""
    index = 0
    length = len(text)
    while index < length:
        end = index + 1
        if text[index] == "{":
            close = text.find("}", index)
            if close != -1:
                end = close + 1
        yield index, end, text[index:end]
        index = end


def total_width(text: str) -> int:
    """Sum the widths of every token in ``text``."""
    return sum(width_of(token) for _, _, token in tokenize(text))


measure_width = total_width


def classify_spans(text: str, limit: int, *, base: int = 0) -> list[WidthSpan]:
    """Split ``text`` into a fitting prefix and an overflowing remainder.

    Width accumulates across the whole text, so once the running total passes
    ``limit`` every following token overflows too. ``base`` is added to each
    span offset so callers can report absolute document positions.
    """
    spans: list[WidthSpan] = []
    running = 0
    span_start = 0
    span_width = 0
    overflowing = False

    for start, _end, token in tokenize(text):
        width = width_of(token)
        running += width
        if not overflowing and running > limit:
            if start > span_start:
                spans.append(WidthSpan(base + span_start, base + start, span_width, "fits"))
            overflowing = True
            span_start = start
            span_width = 0
        span_width += width

    if text:
        kind = "overflows" if overflowing else "fits"
        spans.append(WidthSpan(base + span_start, base + len(text), span_width, kind))
    return spans
