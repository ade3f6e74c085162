"""Console script for porytext."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
import json
from pathlib import Path
import time
from typing import Any, Literal

import click
from rich.console import Console, Group
from rich.live import Live

from . import __version__ as _version
from .config import Settings, load_settings
from .constants import (
    DEFAULT_WATCH_INTERVAL_SECONDS,
    FORMATTED_FUNCTION,
    PORY_SUFFIX,
    RAW_FUNCTION,
)
from .edits import Scope, apply_replacements
from .escapes import normalize_escapes
from .exceptions import DocumentError, PorytextError
from .formatter import format_document, unformat_document
from .locate import validate_text
from .model import LineReport
from .render import render_line, render_report, render_summary
from .util.debug import configure_logging, debug_log
from .util.text import OffsetIndex, line_span, parse_line_range
from .widths import classify_spans, total_width

_PATH_TYPE = click.Path(exists=True, dir_okay=False, path_type=Path)
_Mode = Literal["format", "unformat"]


def _read_document(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(path, cause=exc.__class__.__name__) from exc


def _write_document(path: Path, text: str) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise DocumentError(path, cause=exc.__class__.__name__) from exc


def _scope(document: str, line_range: str | None) -> Scope | None:
    if line_range is None:
        return None
    try:
        first, last = parse_line_range(line_range)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--lines") from exc
    return line_span(document, first, last)


def _rewrite(
    ctx: click.Context,
    path: Path,
    mode: _Mode,
    line_range: str | None,
    check: bool,
    to_stdout: bool,
) -> None:
    console = Console(stderr=to_stdout, soft_wrap=True)
    try:
        document = _read_document(path)
        scope = _scope(document, line_range)
        if mode == "format":
            replacements = format_document(document, scope)
        else:
            replacements = unformat_document(document, scope)
        updated = apply_replacements(document, replacements)
        count = len(replacements)

        if check:
            if count:
                console.print(f"{path}: {count} call(s) would be {mode}ted.")
                ctx.exit(1)
            console.print(f"{path}: nothing to {mode}.")
            return

        if to_stdout:
            click.echo(updated, nl=False)
        elif count:
            _write_document(path, updated)
    except PorytextError as exc:
        raise click.ClickException(str(exc)) from exc

    debug_log("%s: %d replacement(s) for %s", path, count, mode)
    if mode == "format":
        if count:
            console.print(f"Formatted {count} {RAW_FUNCTION}() call(s).")
        else:
            console.print(f"No {RAW_FUNCTION}() calls found to format.")
    elif count:
        console.print(f"Unformatted {count} {FORMATTED_FUNCTION}() call(s) to {RAW_FUNCTION}().")
    else:
        console.print(f"No formatted {FORMATTED_FUNCTION}() calls found to unformat.")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_version, "-v", "--version")
@click.option("--debug", is_flag=True, help="Log debug details to stderr.")
def main(debug: bool) -> None:
    """
    Format, unformat and width-check Poryscript message boxes

    \b
    Example usages:
      porytext format scripts.pory
      porytext unformat scripts.pory --lines 10:40
      porytext validate data/maps/*/scripts.pory --all
      porytext measure "Hello, {PLAYER}!"
    """
    configure_logging(debug)


_LINES_OPTION = click.option(
    "--lines",
    "line_range",
    metavar="START:END",
    default=None,
    help="Only rewrite calls entirely inside these lines (1-based, inclusive).",
)
_CHECK_OPTION = click.option(
    "--check", is_flag=True, help="Do not write; exit 1 when something would change."
)
_STDOUT_OPTION = click.option(
    "--stdout", "to_stdout", is_flag=True, help="Print the result instead of writing the file."
)


@main.command("format")
@click.argument("path", type=_PATH_TYPE)
@_LINES_OPTION
@_CHECK_OPTION
@_STDOUT_OPTION
@click.pass_context
def format_command(
    ctx: click.Context, path: Path, line_range: str | None, check: bool, to_stdout: bool
) -> None:
    """Convert raw fmsgbox() calls into formatted msgbox() calls."""
    _rewrite(ctx, path, "format", line_range, check, to_stdout)


@main.command("unformat")
@click.argument("path", type=_PATH_TYPE)
@_LINES_OPTION
@_CHECK_OPTION
@_STDOUT_OPTION
@click.pass_context
def unformat_command(
    ctx: click.Context, path: Path, line_range: str | None, check: bool, to_stdout: bool
) -> None:
    """Convert formatted msgbox() calls back into raw fmsgbox() calls."""
    _rewrite(ctx, path, "unformat", line_range, check, to_stdout)


def _resolve_settings(
    path: Path | None, config_path: Path | None, max_line_length: int | None
) -> Settings:
    settings = load_settings(path, config_path=config_path)
    if max_line_length is not None:
        settings = replace(settings, max_line_length=max_line_length)
    return settings


def _report_payload(index: OffsetIndex, report: LineReport) -> dict[str, Any]:
    line, column = index.line_col(report.start)
    return {
        "line": line,
        "column": column,
        "start": index.utf16(report.start),
        "end": index.utf16(report.end),
        "text": report.text,
        "width": report.total_width,
        "overflows": report.overflows,
        "spans": [
            {
                "start": index.utf16(span.start),
                "end": index.utf16(span.end),
                "width": span.pixel_width,
                "kind": span.kind,
            }
            for span in report.spans
        ],
    }


def _collect(
    paths: Sequence[Path],
    config_path: Path | None,
    max_line_length: int | None,
    show_all: bool,
) -> tuple[list[Any], list[dict[str, Any]], int, int]:
    renderables: list[Any] = []
    payload: list[dict[str, Any]] = []
    line_count = 0
    overflow_count = 0

    for path in paths:
        if path.suffix.lower() != PORY_SUFFIX:
            renderables.append(f"[dim]Skipping {path}: not a {PORY_SUFFIX} file.[/dim]")
            continue
        settings = _resolve_settings(path, config_path, max_line_length)
        if not settings.enabled:
            renderables.append(f"[dim]Validation disabled by configuration for {path}.[/dim]")
            continue

        document = _read_document(path)
        reports = validate_text(document, settings.max_line_length)
        line_count += len(reports)
        overflow_count += sum(1 for report in reports if report.overflows)
        index = OffsetIndex(document)
        renderables.append(render_report(path, index, reports, settings, show_all=show_all))
        payload.append(
            {
                "path": str(path),
                "max_line_length": settings.max_line_length,
                "lines": [_report_payload(index, report) for report in reports],
            }
        )

    checked = len(payload)
    renderables.append(render_summary(checked, line_count, overflow_count))
    return renderables, payload, line_count, overflow_count


def _mtimes(paths: Sequence[Path]) -> tuple[float, ...]:
    return tuple(path.stat().st_mtime if path.exists() else 0.0 for path in paths)


def _watch(
    console: Console,
    paths: Sequence[Path],
    config_path: Path | None,
    max_line_length: int | None,
    show_all: bool,
    interval: float,
) -> None:
    renderables = _collect(paths, config_path, max_line_length, show_all)[0]
    seen = _mtimes(paths)
    with Live(Group(*renderables), console=console, auto_refresh=False) as live:
        try:
            while True:
                time.sleep(interval)
                current = _mtimes(paths)
                if current == seen:
                    continue
                seen = current
                debug_log("change detected, re-validating %d path(s)", len(paths))
                renderables = _collect(paths, config_path, max_line_length, show_all)[0]
                live.update(Group(*renderables), refresh=True)
        except KeyboardInterrupt:
            return


@main.command("validate")
@click.argument("paths", nargs=-1, required=True, type=_PATH_TYPE)
@click.option(
    "--max-line-length",
    type=click.IntRange(min=1),
    default=None,
    help="Text box width in pixels (default 208, or from porytext.toml).",
)
@click.option(
    "--config",
    "config_path",
    type=_PATH_TYPE,
    default=None,
    help="Settings file to use instead of discovering porytext.toml.",
)
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable reports.")
@click.option("--all", "show_all", is_flag=True, help="Show fitting lines too.")
@click.option("--watch", is_flag=True, help="Re-validate whenever a file changes.")
@click.option(
    "--interval",
    type=click.FloatRange(min=0.05),
    default=DEFAULT_WATCH_INTERVAL_SECONDS,
    show_default=True,
    help="Polling interval for --watch, in seconds.",
)
@click.pass_context
def validate_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    max_line_length: int | None,
    config_path: Path | None,
    as_json: bool,
    show_all: bool,
    watch: bool,
    interval: float,
) -> None:
    """Flag message lines wider than the in-game text box."""
    console = Console()
    try:
        if watch:
            _watch(console, paths, config_path, max_line_length, show_all, interval)
            return
        renderables, payload, _lines, overflowing = _collect(
            paths, config_path, max_line_length, show_all
        )
    except PorytextError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for renderable in renderables:
            console.print(renderable)

    if overflowing:
        ctx.exit(1)


@main.command("measure")
@click.argument("text")
@click.option("--max-line-length", type=click.IntRange(min=1), default=None)
@click.option(
    "--expand", is_flag=True, help="Expand shorthand escapes such as \\e and \\h30 first."
)
@click.pass_context
def measure_command(
    ctx: click.Context, text: str, max_line_length: int | None, expand: bool
) -> None:
    """Print the pixel width of one line of message text."""
    try:
        settings = _resolve_settings(Path.cwd(), None, max_line_length)
    except PorytextError as exc:
        raise click.ClickException(str(exc)) from exc

    if expand:
        text = normalize_escapes(text)
    width = total_width(text)
    limit = settings.max_line_length
    report = LineReport(0, len(text), text, width, tuple(classify_spans(text, limit)))

    console = Console()
    console.print(render_line(report, settings))
    if report.overflows:
        console.print(f"{width}px / {limit}px: overflows by {width - limit}px", style="bold red")
        ctx.exit(1)
    console.print(f"{width}px / {limit}px: fits", style="green")
