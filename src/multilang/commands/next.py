"""multilang next — print the next protocol messages found in child output."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import BinaryIO

import click

from multilang.commands.helpers import load_reader_config, open_reader
from multilang.config.models import ReaderConfig
from multilang.constants import DEFAULT_STREAM_ID
from multilang.reader.tasks import EndOfStreamError


@click.command(name="next")
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
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of messages to read.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each message.",
)
def next_message(
    source: BinaryIO,
    stream_id: str,
    config_path: Path | None,
    count: int,
    timeout: float | None,
) -> None:
    """Read SOURCE (default stdin) and print decoded messages as JSON lines."""
    config = load_reader_config(config_path)
    found = asyncio.run(_read_messages(source, stream_id, config, count, timeout))
    if found == 0:
        raise SystemExit(1)


async def _read_messages(
    source: BinaryIO,
    stream_id: str,
    config: ReaderConfig,
    count: int,
    timeout: float | None,
) -> int:
    """Print up to *count* messages; return how many were found."""
    reader = await open_reader(source, stream_id, config)
    found = 0
    try:
        while found < count:
            try:
                message = await asyncio.wait_for(reader.get_next_message(), timeout)
            except EndOfStreamError:
                if found == 0:
                    click.echo(f"No message found: {stream_id} output ended.", err=True)
                break
            except TimeoutError:
                click.echo(f"Timed out after {timeout}s waiting for a message.", err=True)
                break
            except OSError as exc:
                click.echo(f"Error reading {stream_id}: {exc}", err=True)
                break
            click.echo(message.model_dump_json(by_alias=True))
            found += 1
    finally:
        await reader.aclose()
    return found
