"""Call-site locator and line-width validator."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache
import re

from .constants import DEFAULT_MAX_LINE_LENGTH, ESCAPE_CODE_LENGTH, VALIDATED_FUNCTIONS
from .model import CallSite, LineReport, SpanKind, WidthSpan
from .util.debug import debug_log
from .util.text import iter_lines
from .widths import classify_spans, total_width

_STRING_RE = re.compile(r'"([^"]*)"')
ESCAPE_CODE_RE = re.compile(r"\\[nlp]")


@lru_cache(maxsize=16)
def _call_pattern(function_names: tuple[str, ...]) -> re.Pattern[str]:
    names = "|".join(re.escape(name) for name in function_names)
    return re.compile(
        r"(?P<indent>[ \t]*)(?<![\w])(?P<name>" + names + r")\s*"
        r'\((?P<args>(?:"[^"]*"|[^()"])*)\)'
    )


def _trailing_args(args: str, last_literal_end: int) -> str:
    remainder = args[last_literal_end:].strip()
    return remainder if remainder.startswith(",") else ""


def locate_call_sites(
    text: str, function_names: Sequence[str] = VALIDATED_FUNCTIONS
) -> list[CallSite]:
    """Find calls of ``function_names`` with at least one string literal argument."""
    sites: list[CallSite] = []
    for match in _call_pattern(tuple(function_names)).finditer(text):
        args = match.group("args")
        args_start = match.start("args")
        literals = list(_STRING_RE.finditer(args))
        if not literals:
            continue
        sites.append(
            CallSite(
                start=match.start(),
                end=match.end(),
                indent=match.group("indent"),
                function_name=match.group("name"),
                quoted_segments=tuple(literal.group(1) for literal in literals),
                segment_offsets=tuple(args_start + literal.start(1) for literal in literals),
                trailing_args=_trailing_args(args, literals[-1].end()),
            )
        )
    debug_log("located %d call site(s) for %s", len(sites), ", ".join(function_names))
    return sites


def has_escape_codes(value: str) -> bool:
    return ESCAPE_CODE_RE.search(value) is not None


def _report(line: str, start: int, limit: int) -> LineReport:
    return LineReport(
        start=start,
        end=start + len(line),
        text=line,
        total_width=total_width(line),
        spans=tuple(classify_spans(line, limit, base=start)),
    )


def _validate_raw(content: str, start: int, limit: int) -> list[LineReport]:
    reports: list[LineReport] = []
    for offset, line in iter_lines(content):
        trimmed = line.strip()
        if not trimmed:
            continue
        reports.append(_report(trimmed, start + offset + line.index(trimmed), limit))
    return reports


def _validate_formatted(content: str, start: int, limit: int) -> list[LineReport]:
    reports: list[LineReport] = []
    offset = 0
    for segment in ESCAPE_CODE_RE.split(content):
        if segment:
            reports.append(_report(segment, start + offset, limit))
        offset += len(segment) + ESCAPE_CODE_LENGTH
    return reports


def validate_call_site(site: CallSite, max_line_length: int) -> list[LineReport]:
    """Measure every text line of one call site's string literals."""
    reports: list[LineReport] = []
    for content, start in zip(site.quoted_segments, site.segment_offsets):
        if "\n" in content and not has_escape_codes(content):
            reports.extend(_validate_raw(content, start, max_line_length))
        elif content:
            reports.extend(_validate_formatted(content, start, max_line_length))
    return reports


def validate_text(
    text: str,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    function_names: Sequence[str] = VALIDATED_FUNCTIONS,
) -> list[LineReport]:
    """Validate every message line in a document against ``max_line_length`` pixels."""
    reports: list[LineReport] = []
    for site in locate_call_sites(text, function_names):
        reports.extend(validate_call_site(site, max_line_length))
    return reports


def iter_spans(reports: Iterable[LineReport], kind: SpanKind) -> list[WidthSpan]:
    """Collect every span of ``kind`` across ``reports``, in document order."""
    return [span for report in reports for span in report.spans if span.kind == kind]
