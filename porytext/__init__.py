"""Format, unformat and width-check Poryscript message boxes."""

from ._version import __version__
from .escapes import normalize_escapes
from .formatter import format_block, format_document, unformat_block, unformat_document
from .locate import locate_call_sites, validate_text
from .widths import classify_spans, measure_width, total_width, width_of

__all__ = [
    "__version__",
    "classify_spans",
    "format_block",
    "format_document",
    "locate_call_sites",
    "measure_width",
    "normalize_escapes",
    "total_width",
    "unformat_block",
    "unformat_document",
    "validate_text",
    "width_of",
]
