"""Exception types for pyporytext."""

from __future__ import annotations

from pathlib import Path


class PorytextError(Exception):
    """Base exception for expected application errors."""


class ConfigError(PorytextError):
    """Raised when a settings file or override holds an invalid value."""

    def __init__(self, source: str | Path, detail: str) -> None:
        self.source = str(source)
        super().__init__(f"Invalid configuration in {source}: {detail}")


class DocumentError(PorytextError):
    """Raised when a document cannot be read or written."""

    def __init__(self, path: str | Path, *, cause: str | None = None) -> None:
        detail = f"Unable to access {path}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class EditConflictError(PorytextError):
    """Raised when two replacements cover overlapping document ranges."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Overlapping edits at offsets {first[0]}-{first[1]} and {second[0]}-{second[1]}"
        )
