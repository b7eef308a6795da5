"""Tests for the reader config model and parser."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from multilang.config.models import ReaderConfig
from multilang.config.parser import ConfigError, load_config

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_yaml(path: Path, data: Any) -> Path:
    """Write *data* as YAML and return the file path."""
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


# ===================================================================
# Model validation tests
# ===================================================================


class TestReaderConfig:
    def test_defaults(self) -> None:
        cfg = ReaderConfig()
        assert cfg.max_line_bytes == 1_048_576
        assert cfg.encoding == "utf-8"
        assert cfg.drain_log_level == "INFO"
        assert cfg.preview_chars == 200

    def test_drain_level_number(self) -> None:
        assert ReaderConfig(drain_log_level="DEBUG").drain_level == logging.DEBUG
        assert ReaderConfig().drain_level == logging.INFO

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_line_bytes": 0},
            {"preview_chars": -1},
            {"drain_log_level": "TRACE"},
            {"encoding": "not-a-codec"},
            {"unknown": True},
        ],
    )
    def test_invalid_values(self, overrides: dict[str, Any]) -> None:
        with pytest.raises(ValidationError):
            ReaderConfig.model_validate(overrides)


# ===================================================================
# Parser tests
# ===================================================================


class TestLoadConfig:
    def test_explicit_file(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "cfg.yaml", {"preview_chars": 50})
        assert load_config(path).preview_chars == 50

    def test_reader_section(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path / "cfg.yaml", {"reader": {"drain_log_level": "WARNING"}}
        )
        assert load_config(path).drain_log_level == "WARNING"

    def test_default_file_in_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_yaml(tmp_path / "multilang.yaml", {"max_line_bytes": 4096})
        monkeypatch.chdir(tmp_path)
        assert load_config().max_line_bytes == 4096

    def test_no_default_file_uses_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config() == ReaderConfig()

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ReaderConfig()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_bad_yaml_reports_position(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("reader:\n  preview_chars: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match=r"Invalid YAML in cfg.yaml \(line"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "cfg.yaml", ["a", "b"])
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_reader_section_not_a_mapping(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "cfg.yaml", {"reader": "fast"})
        with pytest.raises(ConfigError, match="Expected 'reader' to be a mapping"):
            load_config(path)

    def test_validation_error_message(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "cfg.yaml", {"max_line_bytes": -5})
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert "Config validation failed" in str(exc_info.value)
        assert "max_line_bytes" in str(exc_info.value)

    def test_reader_section_replaces_top_level(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path / "cfg.yaml",
            {"preview_chars": 10, "reader": {"max_line_bytes": 2048}},
        )
        cfg = load_config(path)
        assert cfg.max_line_bytes == 2048
        assert cfg.preview_chars == 200
