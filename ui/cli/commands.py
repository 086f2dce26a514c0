"""Typer command handlers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from core.policy_runtime import configure_logging, load_effective_config, report_placeholder
from core.report_printer import print_report
from core.system_inspector import collect, inspect_system

logger = logging.getLogger("sysreport.commands")


def _default_root() -> Path:
    return Path(__file__).resolve().parents[2]


def report(root: Path | None = None, stream: TextIO | None = None) -> None:
    """Collect the system report in full, then write it out."""
    config = load_effective_config((root or _default_root()).resolve())
    configure_logging(config)
    system_report = collect(placeholder=report_placeholder(config))
    logger.debug("Collected report: %s", inspect_system(system_report))
    print_report(system_report, stream=stream)
