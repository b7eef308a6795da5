"""Pydantic v2 models for multilang.yaml configuration."""

from __future__ import annotations

import codecs
import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from multilang.constants import MAX_LINE_BYTES, PREVIEW_CHARS


class ReaderConfig(BaseModel):
    """Settings for reading protocol messages from child stdout."""

    model_config = ConfigDict(extra="forbid")

    max_line_bytes: int = Field(
        default=MAX_LINE_BYTES,
        gt=0,
        description="Longest stdout line kept; longer lines are skipped whole",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the child's stdout",
    )
    drain_log_level: Literal["DEBUG", "INFO", "WARNING"] = Field(
        default="INFO",
        description="Log level for lines captured while draining",
    )
    preview_chars: int = Field(
        default=PREVIEW_CHARS,
        gt=0,
        description="Max characters of a skipped line shown in log messages",
    )

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            msg = f"Unknown encoding '{value}'"
            raise ValueError(msg) from exc
        return value

    @property
    def drain_level(self) -> int:
        """``drain_log_level`` as a :mod:`logging` level number."""
        return logging.getLevelName(self.drain_log_level)
