"""Runtime defaults and logging bootstrapping."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from core.system_inspector import DEFAULT_PLACEHOLDER

LOGGER_NAME = "sysreport"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

BUILTIN_DEFAULTS: dict[str, Any] = {
    "report": {"placeholder": DEFAULT_PLACEHOLDER},
    "logging": {"level": "WARNING"},
}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path) -> dict[str, Any]:
    """Merge built-in defaults with ``config/default.yaml`` under ``root``."""
    return merge_dicts(BUILTIN_DEFAULTS, load_yaml(root / "config" / "default.yaml"))


def report_placeholder(config: dict[str, Any]) -> str:
    """Return the text substituted for fields that could not be determined."""
    placeholder = config.get("report", {}).get("placeholder")
    return str(placeholder) if placeholder else DEFAULT_PLACEHOLDER


def configure_logging(config: dict[str, Any]) -> logging.Logger:
    """Attach a single stderr handler to the ``sysreport`` logger."""
    level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
