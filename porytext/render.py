"""Rich renderers for validation reports."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Settings
from .model import LineReport
from .util.text import OffsetIndex


def _span_style(kind: str, settings: Settings) -> str:
    if kind == "overflows":
        return f"black on {settings.warning_color}"
    return settings.valid_color


def render_line(report: LineReport, settings: Settings) -> Text:
    """Render one message line with its fitting and overflowing parts styled."""
    line = Text(report.text)
    for span in report.spans:
        line.stylize(
            _span_style(span.kind, settings),
            span.start - report.start,
            span.end - report.start,
        )
    return line


def _width_cell(report: LineReport, settings: Settings) -> Text:
    style = "bold red" if report.overflows else "green"
    return Text(f"{report.total_width}/{settings.max_line_length}px", style=style)


def render_report(
    path: Path,
    index: OffsetIndex,
    reports: Sequence[LineReport],
    settings: Settings,
    *,
    show_all: bool = True,
) -> Group:
    """Render a document's validated lines as a Rich panel."""
    rows = [report for report in reports if show_all or report.overflows]
    overflowing = sum(1 for report in reports if report.overflows)

    if not rows:
        message = "No message lines found." if not reports else "All lines fit."
        body: Table | Text = Text(message, style="dim")
    else:
        body = Table(show_header=True, header_style="bold", box=None, expand=False)
        body.add_column("Line", justify="right", style="cyan", no_wrap=True)
        body.add_column("Width", justify="right", no_wrap=True)
        body.add_column("Text")
        for report in rows:
            line, column = index.line_col(report.start)
            body.add_row(
                f"{line}:{column}",
                _width_cell(report, settings),
                render_line(report, settings),
            )

    border_style = "red" if overflowing else "blue"
    title = Text(f"{path} ({overflowing} overflowing / {len(reports)} lines)")
    return Group(Panel(body, border_style=border_style, title=title, title_align="left"))


def render_summary(documents: int, lines: int, overflowing: int) -> Text:
    style = "bold red" if overflowing else "bold green"
    return Text(
        f"Checked {lines} line(s) in {documents} document(s): {overflowing} overflowing.",
        style=style,
    )
