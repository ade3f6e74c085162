"""Batch application of document replacements."""

from __future__ import annotations

from collections.abc import Iterable

from .exceptions import EditConflictError
from .model import CallSite, Replacement

Scope = tuple[int, int]


def in_scope(site: CallSite, scope: Scope | None) -> bool:
    """Return whether a call site lies entirely inside ``scope``."""
    if scope is None:
        return True
    start, end = scope
    return start <= site.start and site.end <= end


def apply_replacements(text: str, replacements: Iterable[Replacement]) -> str:
    """Apply replacements highest offset first so earlier offsets stay valid."""
    ordered = sorted(replacements, key=lambda item: (item.start, item.end), reverse=True)
    for later, earlier in zip(ordered, ordered[1:]):
        if earlier.end > later.start:
            raise EditConflictError((earlier.start, earlier.end), (later.start, later.end))

    for replacement in ordered:
        text = text[: replacement.start] + replacement.text + text[replacement.end :]
    return text
