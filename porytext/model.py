"""Data models for call sites, width spans and edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SpanKind = Literal["fits", "overflows"]


@dataclass(frozen=True)
class CallSite:
    start: int
    end: int
    indent: str
    function_name: str
    quoted_segments: tuple[str, ...]
    segment_offsets: tuple[int, ...]
    trailing_args: str


@dataclass(frozen=True)
class WidthSpan:
    start: int
    end: int
    pixel_width: int
    kind: SpanKind


@dataclass(frozen=True)
class Replacement:
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class LineReport:
    """One validated text line with absolute document offsets."""

    start: int
    end: int
    text: str
    total_width: int
    spans: tuple[WidthSpan, ...]

    @property
    def overflows(self) -> bool:
        return any(span.kind == "overflows" for span in self.spans)
