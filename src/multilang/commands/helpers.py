"""Shared helpers for the reader commands."""

from __future__ import annotations

import asyncio
import os
import stat
from pathlib import Path
from typing import BinaryIO

import click

from multilang.config.models import ReaderConfig
from multilang.config.parser import ConfigError, load_config
from multilang.reader.message_reader import MessageReader


def load_reader_config(config_path: Path | None) -> ReaderConfig:
    """Load config or exit with a user-facing error."""
    try:
        return load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from None


def _is_pipe(source: BinaryIO) -> bool:
    try:
        mode = os.fstat(source.fileno()).st_mode
    except (OSError, ValueError):
        return False
    return stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or stat.S_ISCHR(mode)


async def open_reader(
    source: BinaryIO, stream_id: str, config: ReaderConfig
) -> MessageReader:
    """Build a reader for *source*.

    Pipes and terminals are read incrementally.  Regular files (and
    in-memory streams) can't be attached to the event loop, so their
    content is fed to a ``StreamReader`` up front.
    """
    if _is_pipe(source):
        return await MessageReader.open(source, stream_id, config=config)

    reader = asyncio.StreamReader()
    reader.feed_data(source.read())
    reader.feed_eof()
    return MessageReader.from_stream(reader, stream_id, config=config)
