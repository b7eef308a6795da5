"""Load and validate multilang.yaml configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from multilang.config.models import ReaderConfig

DEFAULT_CONFIG_NAME = "multilang.yaml"
READER_SECTION = "reader"


class ConfigError(Exception):
    """User-facing configuration error."""


def load_config(path: Path | None = None) -> ReaderConfig:
    """Load and validate reader settings.

    Settings live either at the top level of the file or under a
    ``reader:`` key.

    Args:
        path: Explicit config file path. If None, uses multilang.yaml in
              the current directory when present, defaults otherwise.

    Returns:
        A validated ReaderConfig instance.

    Raises:
        ConfigError: On missing explicit file, bad YAML, or validation failure.
    """
    config_path = _resolve_path(path)
    if config_path is None:
        return ReaderConfig()
    return _validate(_read_settings(config_path))


def _resolve_path(path: Path | None) -> Path | None:
    if path is not None:
        resolved = Path(path)
        if not resolved.is_file():
            msg = f"Config file not found: {resolved}"
            raise ConfigError(msg)
        return resolved

    default = Path.cwd() / DEFAULT_CONFIG_NAME
    return default if default.is_file() else None


def _yaml_location(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None)
    if mark is None:
        return ""
    return f" (line {mark.line + 1}, column {mark.column + 1})"


def _read_settings(path: Path) -> dict[str, Any]:
    """Return the reader settings mapping from *path*.

    An empty file yields no settings.  A ``reader:`` section, when
    present, takes the place of the whole document.
    """
    try:
        with path.open(encoding="utf-8") as fh:
            document = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path.name}{_yaml_location(exc)}") from exc

    document = {} if document is None else document
    if not isinstance(document, dict):
        kind = type(document).__name__
        raise ConfigError(f"Expected a YAML mapping in {path.name}, got {kind}")

    if READER_SECTION not in document:
        return document
    section = document[READER_SECTION]
    if not isinstance(section, dict):
        raise ConfigError(
            f"Expected '{READER_SECTION}' to be a mapping in {path.name}"
        )
    return section


def _validate(raw: dict[str, Any]) -> ReaderConfig:
    try:
        return ReaderConfig.model_validate(raw)
    except ValidationError as exc:
        parts: list[str] = []
        for err in exc.errors():
            loc = " → ".join(str(s) for s in err["loc"]) or "reader"
            parts.append(f"  {loc}: {err['msg']}")
        joined = "\n".join(parts)
        msg = f"Config validation failed:\n{joined}"
        raise ConfigError(msg) from exc
