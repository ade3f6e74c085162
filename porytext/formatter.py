"""Conversion between raw ``fmsgbox`` text and formatted ``msgbox`` calls."""

from __future__ import annotations

from .constants import (
    CONTENT_INDENT,
    ESCAPE_LINE,
    ESCAPE_NEWLINE,
    ESCAPE_PARAGRAPH,
    FORMATTED_FUNCTION,
    RAW_FUNCTION,
)
from .edits import Scope, in_scope
from .escapes import normalize_escapes
from .locate import has_escape_codes, locate_call_sites
from .model import CallSite, Replacement
from .util.debug import debug_log
from .util.text import detect_eol, split_lines


def _quoted_lines(raw: str) -> list[str]:
    lines = [line.strip() for line in split_lines(raw)]

    quoted: list[str] = []
    start_of_paragraph = True
    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1
        if not line:
            continue

        if index == len(lines):
            escape_code = ""
        elif not lines[index]:
            escape_code = ESCAPE_PARAGRAPH
            index += 1
            start_of_paragraph = True
        else:
            escape_code = ESCAPE_NEWLINE if start_of_paragraph else ESCAPE_LINE
            start_of_paragraph = False

        quoted.append(f'"{line}{escape_code}"')
    return quoted


def format_block(
    raw: str,
    indent: str = "",
    function_name: str = FORMATTED_FUNCTION,
    trailing_args: str = "",
    eol: str = "\n",
) -> str:
    """Turn a raw multi-line message into a formatted call expression.

    Each non-blank line becomes its own quoted literal. A line followed by a
    blank line ends with ``\\p``; otherwise the first line of a paragraph ends
    with ``\\n`` and later lines with ``\\l``. The final line has no code.
    """
    quoted = _quoted_lines(normalize_escapes(raw)) or ['""']
    parts = [f"{indent}{function_name}({quoted[0]}"]
    parts.extend(f"{indent}{CONTENT_INDENT}{line}" for line in quoted[1:])
    parts[-1] += f"{trailing_args})"
    return eol.join(parts)


def is_formatted(site: CallSite) -> bool:
    """A call is formatted when it has several literals or any escape code."""
    return len(site.quoted_segments) > 1 or any(
        has_escape_codes(segment) for segment in site.quoted_segments
    )


def unformat_call(site: CallSite, eol: str = "\n") -> str | None:
    """Rebuild the raw ``fmsgbox`` call for a formatted site, or None to skip it."""
    if not is_formatted(site):
        return None

    content = (
        "".join(site.quoted_segments)
        .replace(ESCAPE_NEWLINE, "\n")
        .replace(ESCAPE_LINE, "\n")
        .replace(ESCAPE_PARAGRAPH, "\n\n")
    )
    lines = [
        line if index == 0 or not line else f"{site.indent}{line}"
        for index, line in enumerate(content.split("\n"))
    ]
    body = eol.join(lines)
    return f'{site.indent}{RAW_FUNCTION}("{body}"{site.trailing_args})'


def unformat_block(call_text: str) -> str:
    """Convert one formatted ``msgbox`` call back to raw form.

    Text without a formatted call is returned unchanged.
    """
    sites = locate_call_sites(call_text, (FORMATTED_FUNCTION,))
    if not sites:
        return call_text
    site = sites[0]
    raw = unformat_call(site, detect_eol(call_text))
    if raw is None:
        return call_text
    return call_text[: site.start] + raw + call_text[site.end :]


def _opens_with_literal(text: str, site: CallSite) -> bool:
    before_literal = text[site.start : site.segment_offsets[0] - 1]
    return before_literal.rstrip().endswith("(")


def format_document(text: str, scope: Scope | None = None) -> list[Replacement]:
    """Collect a replacement for every raw call in ``text`` (or in ``scope``)."""
    eol = detect_eol(text)
    replacements: list[Replacement] = []
    for site in locate_call_sites(text, (RAW_FUNCTION,)):
        if not in_scope(site, scope) or not _opens_with_literal(text, site):
            continue
        formatted = format_block(
            "".join(site.quoted_segments),
            indent=site.indent,
            trailing_args=site.trailing_args,
            eol=eol,
        )
        replacements.append(Replacement(site.start, site.end, formatted))
    debug_log("prepared %d format replacement(s)", len(replacements))
    return replacements


def unformat_document(text: str, scope: Scope | None = None) -> list[Replacement]:
    """Collect a replacement for every formatted call in ``text`` (or in ``scope``)."""
    eol = detect_eol(text)
    replacements: list[Replacement] = []
    for site in locate_call_sites(text, (FORMATTED_FUNCTION,)):
        if not in_scope(site, scope):
            continue
        raw = unformat_call(site, eol)
        if raw is None:
            debug_log("skipping unformatted call at offset %d", site.start)
            continue
        replacements.append(Replacement(site.start, site.end, raw))
    debug_log("prepared %d unformat replacement(s)", len(replacements))
    return replacements
