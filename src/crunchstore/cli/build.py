"""Build commands for crunchstore CLI.

Commands:
- build: Chunk a directory and emit it as a Python module
- stats: Chunk a directory and report deduplication statistics
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TextIO

import click

from crunchstore.core.build import Build
from crunchstore.core.config import SECTOR_SIZE, BuildConfig
from crunchstore.core.errors import CrunchError
from crunchstore.emit import EmitMode, emit_module
from crunchstore.walker import IgnorePatterns, walk_files

logger = logging.getLogger(__name__)


_SOURCE_OPTIONS = [
    click.argument(
        "root",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    ),
    click.option(
        "--ext", "-e", "extensions", multiple=True, help="Only include files with this extension (repeatable)."
    ),
    click.option("--ignore", "ignore_patterns", multiple=True, help="Skip paths matching this pattern (repeatable)."),
    click.option(
        "--ignore-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Read further ignore patterns from this file.",
    ),
    click.option(
        "--workers", "-w", type=click.IntRange(min=1), default=1, show_default=True, help="Threads used to chunk files."
    ),
    click.option(
        "--sector-size", type=click.IntRange(min=1), default=SECTOR_SIZE, show_default=True, help="Chunk size in bytes."
    ),
]


def source_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the arguments shared by every command that scans a directory."""
    for decorator in reversed(_SOURCE_OPTIONS):
        func = decorator(func)
    return func


def run_build(
    root: Path,
    extensions: tuple[str, ...],
    ignore_patterns: tuple[str, ...],
    ignore_file: Path | None,
    workers: int,
    sector_size: int,
) -> Build:
    """Scan root into a sealed Build, converting core errors to CLI errors."""
    config = BuildConfig(
        sector_size=sector_size,
        extensions=extensions,
        ignore_patterns=list(ignore_patterns),
        ignore_file=ignore_file,
        workers=workers,
    )
    ignore = IgnorePatterns(config.ignore_patterns)
    if config.ignore_file is not None:
        ignore.load_from_file(config.ignore_file)
    logger.info("Scanning %s", root)
    result = Build(config)
    try:
        result.add_files(walk_files(root, config.extensions, ignore))
    except CrunchError as e:
        raise click.ClickException(str(e)) from e
    result.seal()
    return result


@click.command()
@source_options
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in EmitMode]),
    default=EmitMode.PLAIN.value,
    show_default=True,
    help="Flavour of generated module.",
)
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Output file (default: stdout).")
@click.option("--no-timestamp", is_flag=True, help="Omit the creation date for reproducible output.")
def build(mode: str, output: TextIO, no_timestamp: bool, **source: Any) -> None:
    """Embed the files under ROOT as a Python module."""
    result = run_build(**source)
    module_source = emit_module(
        result.store,
        result.registry,
        mode=mode,
        generated_by=f"crunchstore build {source['root']}",
        timestamp=not no_timestamp,
    )
    output.write(module_source)


@click.command()
@source_options
def stats(**source: Any) -> None:
    """Report deduplication statistics for the files under ROOT."""
    summary = run_build(**source).stats()
    click.echo(f"Files:         {summary.files}")
    click.echo(f"Input bytes:   {summary.input_bytes}")
    click.echo(f"Unique chunks: {summary.unique_chunks}")
    click.echo(f"Stored bytes:  {summary.stored_bytes}")
    click.echo(f"Dedup hits:    {summary.dedup_hits}")
    click.echo(f"Saved bytes:   {summary.saved_bytes}")
