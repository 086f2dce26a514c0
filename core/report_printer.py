"""Plain-text rendering of a collected system report."""

from __future__ import annotations

import sys
from typing import TextIO

import typer

from core.errors import ReportWriteError
from core.system_inspector import SystemReport

LABEL_WIDTH = 21

RUNTIME_SECTION = "Runtime Information"
SYSTEM_SECTION = "System Information"

# (section, [(label, field)]) in output order.
SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        RUNTIME_SECTION,
        [
            ("Runtime Version:", "runtime_version"),
            ("Runtime Identifier:", "runtime_identifier"),
            ("Framework:", "framework_description"),
        ],
    ),
    (
        SYSTEM_SECTION,
        [
            ("OS:", "os_description"),
            ("OS Architecture:", "os_architecture"),
            ("Process Architecture:", "process_architecture"),
            ("Machine Name:", "machine_name"),
            ("User Name:", "user_name"),
            ("Processor Count:", "processor_count"),
            ("64-bit OS:", "is_64bit_os"),
            ("64-bit Process:", "is_64bit_process"),
        ],
    ),
]


def _format_line(label: str, value: object) -> str:
    return f"  {label.ljust(LABEL_WIDTH)}{value}"


def render_report(report: SystemReport) -> str:
    """Render both sections, separated by a blank line, with aligned labels."""
    blocks: list[str] = []
    for title, fields in SECTIONS:
        lines = [f"=== {title} ==="]
        lines.extend(_format_line(label, str(getattr(report, field))) for label, field in fields)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def print_report(report: SystemReport, stream: TextIO | None = None) -> None:
    """Write the rendered report to ``stream`` (stdout by default) in one call."""
    text = render_report(report)
    stream = stream if stream is not None else sys.stdout
    if stream is None:
        raise ReportWriteError("standard output is not available")
    try:
        typer.echo(text, file=stream, nl=False)
    except (OSError, ValueError) as exc:
        raise ReportWriteError(f"Failed to write system report: {exc}") from exc
