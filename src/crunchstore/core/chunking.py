"""Fixed-size chunking for crunchstore.

This module provides:
- fingerprint(): content identity for a block
- split_blocks(): fixed sector-sized windows over a buffer
- FileChunker: feeds a file's windows into a ChunkStore and registers the result
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from crunchstore.core.config import SECTOR_SIZE
from crunchstore.core.errors import DuplicatePathError
from crunchstore.core.registry import FileEntry

if TYPE_CHECKING:
    from crunchstore.core.registry import FileRegistry
    from crunchstore.core.store import ChunkStore

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 32


def fingerprint(data: bytes) -> str:
    """Compute the content fingerprint of a block.

    MD5 is used purely as a dedup identity within one build; collisions
    are detected by the store rather than trusted away.

    Args:
        data: Raw bytes to fingerprint.

    Returns:
        Hex-encoded digest (32 characters).
    """
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def split_blocks(data: bytes, sector_size: int = SECTOR_SIZE) -> Iterator[bytes]:
    """Split data into consecutive fixed-size windows.

    Every window is exactly sector_size bytes except the last, which may
    be short. Empty data yields no windows.

    Args:
        data: Raw bytes to split.
        sector_size: Window size in bytes.

    Yields:
        Byte windows in file order.
    """
    size = len(data)
    idx = 0
    while idx < size:
        end = min(idx + sector_size, size)
        yield data[idx:end]
        idx = end


class FileChunker:
    """Chunks files into a ChunkStore and records them in a FileRegistry."""

    def __init__(
        self,
        store: ChunkStore,
        registry: FileRegistry,
        sector_size: int = SECTOR_SIZE,
    ) -> None:
        self._store = store
        self._registry = registry
        self._sector_size = sector_size

    def chunk_file(self, path: str, data: bytes) -> FileEntry:
        """Chunk one file and register it.

        Args:
            path: Logical path of the file (unique per build).
            data: Full file contents.

        Returns:
            The registered FileEntry.

        Raises:
            DuplicatePathError: If path was already registered.
            CollisionError: If a window collides with a different stored block.
        """
        if path in self._registry:
            raise DuplicatePathError(path)

        fingerprints = tuple(
            self._store.put(block, context=path)
            for block in split_blocks(data, self._sector_size)
        )
        entry = FileEntry(path=path, fingerprints=fingerprints, size=len(data))
        self._registry.register(path, entry)
        logger.debug("Chunked %s: %d bytes in %d chunks", path, entry.size, entry.chunk_count)
        return entry
