"""Command-line interface for crunchstore.

This module provides the main CLI entry point and assembles all commands.

Commands:
- build: Chunk a directory and emit it as a Python module
- stats: Chunk a directory and report deduplication statistics
- read: Chunk a directory and print a byte range of one file
"""

from __future__ import annotations

import logging
import sys

import click

from crunchstore.cli.build import build, stats
from crunchstore.cli.read import read

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int) -> None:
    """Configure the crunchstore logger to write to stderr.

    Stdout is reserved for command output (generated source or raw bytes).

    Args:
        level: Logging level for the crunchstore logger.
    """
    root_logger = logging.getLogger("crunchstore")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stderr_handler)


@click.group()
@click.version_option(package_name="crunchstore")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """crunchstore - Deduplicated, content-addressed file embedding."""
    if verbose >= 2:
        setup_logging(logging.DEBUG)
    elif verbose == 1:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)


cli.add_command(build)
cli.add_command(stats)
cli.add_command(read)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "cli",
    "main",
    "setup_logging",
]
