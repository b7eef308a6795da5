"""Configuration model and parser for multilang.yaml."""

from multilang.config.models import ReaderConfig
from multilang.config.parser import ConfigError, load_config

__all__ = [
    "ConfigError",
    "ReaderConfig",
    "load_config",
]
