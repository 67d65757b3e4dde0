"""Read command for crunchstore CLI.

Commands:
- read: Chunk a directory and print a byte range of one file
"""

from __future__ import annotations

from typing import Any

import click

from crunchstore.cli.build import run_build, source_options
from crunchstore.core.errors import PathNotFoundError


@click.command()
@source_options
@click.argument("path")
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True, help="First byte to read.")
@click.option("--length", type=click.IntRange(min=0), default=None, help="Bytes to read (default: to end of file).")
def read(path: str, offset: int, length: int | None, **source: Any) -> None:
    """Write bytes of PATH, as stored from ROOT, to stdout."""
    reader = run_build(**source).reader()
    try:
        fragments = reader.read_fragments(path, offset, length)
    except PathNotFoundError as e:
        raise click.ClickException(str(e)) from e
    stdout = click.get_binary_stream("stdout")
    for fragment in fragments:
        stdout.write(fragment)
    stdout.flush()
