"""Error types for report output."""

from __future__ import annotations


class ReportWriteError(RuntimeError):
    """Raised when the rendered report cannot be written to its stream."""
