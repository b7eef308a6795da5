"""Root CLI group and version flag."""

import logging

import click

from multilang import __version__
from multilang.commands.drain import drain
from multilang.commands.next import next_message


@click.group()
@click.version_option(version=__version__, prog_name="multilang")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped lines too.")
def cli(verbose: bool) -> None:
    """multilang — read protocol messages from child-process output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(next_message)
cli.add_command(drain)
