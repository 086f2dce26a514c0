"""Runtime defaults and logging setup tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.policy_runtime import (
    configure_logging,
    load_effective_config,
    load_yaml,
    merge_dicts,
    report_placeholder,
)


def test_load_yaml_missing_file_returns_empty(tmp_path: Path) -> None:
    assert load_yaml(tmp_path / "absent.yaml") == {}


def test_load_yaml_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_yaml(path)


def test_merge_dicts_is_recursive() -> None:
    merged = merge_dicts({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})

    assert merged == {"a": {"x": 1, "y": 3}, "b": 1}


def test_effective_config_defaults_without_file(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)

    assert report_placeholder(config) == "unknown"
    assert config["logging"]["level"] == "WARNING"


def test_effective_config_overrides_placeholder(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "default.yaml").write_text(
        "report:\n  placeholder: n/a\n", encoding="utf-8"
    )

    config = load_effective_config(tmp_path)

    assert report_placeholder(config) == "n/a"
    assert config["logging"]["level"] == "WARNING"


def test_configure_logging_sets_level() -> None:
    logger = configure_logging({"logging": {"level": "debug"}})

    assert logger.name == "sysreport"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    configure_logging({"logging": {"level": "WARNING"}})
    assert len(logger.handlers) == 1


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging({"logging": {"level": "chatty"}})


def test_load_yaml_wraps_syntax_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("report: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_yaml(path)


def test_configure_logging_does_not_propagate_to_root() -> None:
    logger = configure_logging({"logging": {"level": "WARNING"}})

    assert logger.propagate is False
