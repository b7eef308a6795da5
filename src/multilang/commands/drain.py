"""multilang drain — log everything left in child output."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import BinaryIO

import click

from multilang.commands.helpers import load_reader_config, open_reader
from multilang.config.models import ReaderConfig
from multilang.constants import DEFAULT_STREAM_ID


@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "--stream-id",
    default=DEFAULT_STREAM_ID,
    show_default=True,
    help="Identifier attached to log output.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to multilang.yaml.",
)
def drain(source: BinaryIO, stream_id: str, config_path: Path | None) -> None:
    """Drain SOURCE (default stdin) into the log until it closes."""
    config = load_reader_config(config_path)
    completed, lines = asyncio.run(_drain(source, stream_id, config))
    if not completed:
        click.echo(f"Error reading {stream_id} after {lines} lines.", err=True)
        raise SystemExit(1)
    click.echo(f"Drained {lines} lines from {stream_id}.")


async def _drain(
    source: BinaryIO, stream_id: str, config: ReaderConfig
) -> tuple[bool, int]:
    reader = await open_reader(source, stream_id, config)
    try:
        completed = await reader.drain_remaining_output()
    finally:
        await reader.aclose()
    return completed, reader.lines_read
