from __future__ import annotations

import re

import pytest

from porytext.edits import apply_replacements
from porytext.exceptions import EditConflictError
from porytext.formatter import (
    format_block,
    format_document,
    is_formatted,
    unformat_block,
    unformat_document,
)
from porytext.locate import locate_call_sites
from porytext.model import Replacement


def _literals(formatted: str) -> list[str]:
    return re.findall(r'"([^"]*)"', formatted)


def test_format_paragraph_break_scenario() -> None:
    assert format_block("Hello\n\nWorld") == 'msgbox("Hello\\p"\n    "World")'


def test_format_single_paragraph_uses_n_then_l() -> None:
    formatted = format_block("one\ntwo\nthree\nfour")

    assert _literals(formatted) == ["one\\n", "two\\l", "three\\l", "four"]


def test_format_new_paragraph_restarts_with_n() -> None:
    formatted = format_block("a\nb\n\nc\nd\ne")

    assert _literals(formatted) == ["a\\n", "b\\p", "c\\n", "d\\l", "e"]


def test_format_trims_lines_and_skips_leading_and_extra_blank_lines() -> None:
    raw = "\n\n   first line   \n\tsecond\n\n\n  third  "

    assert _literals(format_block(raw)) == ["first line\\n", "second\\p", "third"]


def test_format_closing_quote_on_own_line_ends_paragraph() -> None:
    assert _literals(format_block("Hello\nWorld\n    ")) == ["Hello\\n", "World\\p"]
    assert _literals(format_block("only\n   \n")) == ["only\\p"]


def test_format_round_trip_keeps_final_paragraph_break() -> None:
    raw = "Hello\n    World\n    "
    formatted = format_block(raw, indent="    ")

    assert formatted == '    msgbox("Hello\\n"\n        "World\\p")'
    assert unformat_block(formatted) == '    fmsgbox("Hello\n    World\n\n")'


def test_format_indent_and_trailing_args() -> None:
    formatted = format_block(
        "Hi\nthere", indent="\t", function_name="msgbox", trailing_args=", MSGBOX_AUTOCLOSE"
    )

    assert formatted == '\tmsgbox("Hi\\n"\n\t    "there", MSGBOX_AUTOCLOSE)'


def test_format_uses_given_line_ending() -> None:
    assert format_block("a\r\nb", eol="\r\n") == 'msgbox("a\\n"\r\n    "b")'


def test_format_applies_escape_shorthands() -> None:
    assert format_block("POK\\eMON costs $5\\h10") == 'msgbox("POKéMON costs ¥5{PAUSE_10}")'


@pytest.mark.parametrize("raw", ["", "   ", "\n\n  \n"])
def test_format_empty_input_emits_single_empty_literal(raw: str) -> None:
    assert format_block(raw, indent="  ") == '  msgbox("")'


def test_unformat_scenario() -> None:
    assert unformat_block('msgbox("Line1\\nLine2\\p""MoreLine")') == (
        'fmsgbox("Line1\nLine2\n\nMoreLine")'
    )


def test_unformat_reindents_and_keeps_trailing_args() -> None:
    call = '    msgbox("Hi\\n"\n        "there\\p"\n        "bye", MSGBOX_YESNO)'

    assert unformat_block(call) == '    fmsgbox("Hi\n    there\n\n    bye", MSGBOX_YESNO)'


def test_unformat_passes_through_plain_calls() -> None:
    call = 'msgbox("Just one line")'

    assert unformat_block(call) == call


def test_unformat_without_call_is_unchanged() -> None:
    assert unformat_block("end") == "end"


def test_is_formatted_rules() -> None:
    single, multi, escaped = locate_call_sites(
        'msgbox("x") msgbox("a" "b") msgbox("c\\l")', ("msgbox",)
    )

    assert not is_formatted(single)
    assert is_formatted(multi)
    assert is_formatted(escaped)


def test_round_trip_raw_to_formatted_to_raw() -> None:
    raw = "Hello there!\nHow are you?\n\nFine, thanks."
    formatted = format_block(raw)

    assert unformat_block(formatted) == f'fmsgbox("{raw}")'


def test_round_trip_formatted_to_raw_to_formatted() -> None:
    formatted = 'msgbox("Hello\\n"\n    "there\\l"\n    "friend\\p"\n    "Bye")'
    document = f"script Talk {{\n{formatted}\n}}\n"

    raw_document = apply_replacements(document, unformat_document(document))
    again = apply_replacements(raw_document, format_document(raw_document))

    assert again == document


def test_format_document_rewrites_every_raw_call_in_order() -> None:
    document = (
        "script A {\n"
        '    fmsgbox("one\n    two")\n'
        '    msgbox("untouched")\n'
        '    fmsgbox("three\n\n    four", MSGBOX_DEFAULT)\n'
        "}\n"
    )

    replacements = format_document(document)
    result = apply_replacements(document, replacements)

    assert len(replacements) == 2
    assert replacements[0].start < replacements[1].start
    assert result == (
        "script A {\n"
        '    msgbox("one\\n"\n        "two")\n'
        '    msgbox("untouched")\n'
        '    msgbox("three\\p"\n        "four", MSGBOX_DEFAULT)\n'
        "}\n"
    )


def test_format_document_keeps_crlf_documents_crlf() -> None:
    document = 'fmsgbox("a\r\nb")\r\n'

    result = apply_replacements(document, format_document(document))

    assert result == 'msgbox("a\\n"\r\n    "b")\r\n'


def test_format_document_requires_literal_first_argument() -> None:
    assert format_document('fmsgbox(VAR, "text")') == []


def test_format_document_respects_scope() -> None:
    document = 'fmsgbox("a\nb")\nfmsgbox("c\nd")\n'
    second_start = document.index('fmsgbox("c')

    replacements = format_document(document, scope=(second_start, len(document)))

    assert [item.start for item in replacements] == [second_start]


def test_unformat_document_skips_plain_and_raw_calls() -> None:
    document = 'msgbox("plain")\nfmsgbox("raw\\l")\nmsgbox("a\\n" "b")\n'

    replacements = unformat_document(document)

    assert len(replacements) == 1
    assert replacements[0].text == 'fmsgbox("a\nb")'


def test_apply_replacements_rejects_overlaps() -> None:
    with pytest.raises(EditConflictError):
        apply_replacements("abcdef", [Replacement(0, 3, "x"), Replacement(2, 4, "y")])


def test_apply_replacements_order_independent() -> None:
    edits = [Replacement(4, 6, "EF"), Replacement(0, 1, "A")]

    assert apply_replacements("abcdef", edits) == "AbcdEF"
