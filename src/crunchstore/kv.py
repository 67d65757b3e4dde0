"""Read-only key/value facade over a sealed build.

This is the query surface: it resolves a path to its chunks, clamps the
requested window to the file size and hands the chunks to read_range().
Unknown paths raise PathNotFoundError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crunchstore.core.errors import PathNotFoundError
from crunchstore.core.ranges import read_range

if TYPE_CHECKING:
    from crunchstore.core.registry import FileEntry, FileRegistry
    from crunchstore.core.store import ChunkStore

logger = logging.getLogger(__name__)


def normalize_key(path: str) -> str:
    """Strip leading slashes so "/a.txt" and "a.txt" name the same file."""
    return path.lstrip("/")


class ReadOnlyStore:
    """Read-only access to files held in a ChunkStore."""

    def __init__(self, store: ChunkStore, registry: FileRegistry) -> None:
        self._store = store
        self._registry = registry

    def _resolve(self, path: str) -> str:
        """Return the registered key for path: exact match first, then without leading slashes."""
        if path in self._registry:
            return path
        return normalize_key(path)

    def _entry(self, path: str) -> FileEntry:
        entry = self._registry.lookup(self._resolve(path))
        if entry is None:
            raise PathNotFoundError(path)
        return entry

    def list(self) -> list[str]:
        """Return all paths in registration order."""
        return list(self._registry)

    def exists(self, path: str) -> bool:
        return self._resolve(path) in self._registry

    def size(self, path: str) -> int:
        """Return a file's size in bytes.

        Raises:
            PathNotFoundError: If path is unknown.
        """
        return self._entry(path).size

    def read_fragments(self, path: str, offset: int = 0, length: int | None = None) -> list[bytes]:
        """Return the chunk fragments covering a byte range.

        Args:
            path: File to read.
            offset: First byte wanted.
            length: Bytes wanted (None reads to end of file). Clamped to
                the bytes available after offset.

        Returns:
            Fragments in file order; empty if offset is at or past the end.

        Raises:
            PathNotFoundError: If path is unknown.
        """
        entry = self._entry(path)
        available = max(entry.size - offset, 0)
        length = available if length is None else min(length, available)
        chunks = self._store.resolve(entry.fingerprints)
        fragments = read_range(chunks, offset, length)
        logger.debug("Read %s [%d, +%d) in %d fragments", path, offset, length, len(fragments))
        return fragments

    def read_range(self, path: str, offset: int, length: int) -> bytes:
        """Return a byte range of a file as a single buffer."""
        return b"".join(self.read_fragments(path, offset, length))

    def read(self, path: str) -> bytes:
        """Return a whole file."""
        return b"".join(self.read_fragments(path))
