"""Build pass: feed (path, bytes) pairs into a fresh store and registry.

Each Build owns its own ChunkStore and FileRegistry, so several builds can
run in one process without sharing state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING

from crunchstore.core.chunking import FileChunker
from crunchstore.core.config import BuildConfig
from crunchstore.core.registry import FileEntry, FileRegistry
from crunchstore.core.store import ChunkStore

if TYPE_CHECKING:
    from crunchstore.kv import ReadOnlyStore

logger = logging.getLogger(__name__)


@dataclass
class BuildStats:
    """Summary of a build pass."""

    files: int
    input_bytes: int
    unique_chunks: int
    stored_bytes: int
    dedup_hits: int

    @property
    def saved_bytes(self) -> int:
        """Bytes not stored thanks to deduplication."""
        return self.input_bytes - self.stored_bytes


class Build:
    """A single build of a deduplicated chunk store.

    Usage:
        build = Build(BuildConfig(workers=4))
        build.add_files(walk_files(root))
        build.seal()
        data = build.reader().read("index.html")
    """

    def __init__(self, config: BuildConfig | None = None, store: ChunkStore | None = None) -> None:
        """Initialize an empty build.

        Args:
            config: Build configuration (defaults to BuildConfig()).
            store: Chunk store to fill (defaults to a new ChunkStore).
        """
        self.config = config or BuildConfig()
        self.store = store if store is not None else ChunkStore()
        self.registry = FileRegistry()
        self._chunker = FileChunker(self.store, self.registry, self.config.sector_size)

    def add_file(self, path: str, data: bytes) -> FileEntry:
        """Chunk and register one file."""
        return self._chunker.chunk_file(path, data)

    def add_files(self, files: Iterable[tuple[str, bytes]]) -> list[FileEntry]:
        """Chunk and register many files.

        With config.workers > 1 files are chunked on a thread pool; the
        first file to fail aborts the build and files still queued are
        never chunked.

        Args:
            files: (path, bytes) pairs with unique paths.

        Returns:
            Registered entries in input order.
        """
        if self.config.workers == 1:
            entries = [self.add_file(path, data) for path, data in files]
        else:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                futures = [pool.submit(self.add_file, path, data) for path, data in files]
                for future in as_completed(futures):
                    error = future.exception()
                    if error is not None:
                        # Queued files are dropped; running ones finish
                        pool.shutdown(wait=True, cancel_futures=True)
                        raise error
                entries = [future.result() for future in futures]
        logger.info("Added %d files (%d unique chunks)", len(entries), len(self.store))
        return entries

    def seal(self) -> BuildStats:
        """Freeze the store and registry, and return the build summary."""
        self.store.seal()
        self.registry.seal()
        stats = self.stats()
        logger.info(
            "Build sealed: %d files, %d bytes in, %d unique chunks (%d bytes), %d dedup hits",
            stats.files,
            stats.input_bytes,
            stats.unique_chunks,
            stats.stored_bytes,
            stats.dedup_hits,
        )
        return stats

    def stats(self) -> BuildStats:
        entries = self.registry.entries()
        return BuildStats(
            files=len(entries),
            input_bytes=sum(entry.size for entry in entries),
            unique_chunks=len(self.store),
            stored_bytes=self.store.stored_bytes,
            dedup_hits=self.store.dedup_hits,
        )

    def reader(self) -> ReadOnlyStore:
        """Return a read-only query facade over this build."""
        from crunchstore.kv import ReadOnlyStore

        return ReadOnlyStore(self.store, self.registry)
