"""In-memory content-addressed chunk store.

This module provides:
- ChunkStore: fingerprint -> bytes mapping with dedup and collision detection

The store is append-only. Once sealed it rejects every write, which makes
concurrent reads safe without locking.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from crunchstore.core.chunking import fingerprint as default_fingerprint
from crunchstore.core.errors import CollisionError, StoreSealedError, UnknownChunkError

logger = logging.getLogger(__name__)


class ChunkStore:
    """Deduplicated mapping from fingerprint to chunk bytes."""

    def __init__(self, fingerprint: Callable[[bytes], str] | None = None) -> None:
        """Initialize an empty store.

        Args:
            fingerprint: Fingerprint function (defaults to MD5 hex digest).
                Injectable so tests can force collisions.
        """
        self._fingerprint = fingerprint or default_fingerprint
        self._chunks: dict[str, bytes] = {}
        self._lock = threading.Lock()
        self._dedup_hits = 0
        self._stored_bytes = 0
        self._sealed = False

    def put(self, data: bytes, context: str | None = None) -> str:
        """Store a block, deduplicating by fingerprint.

        Args:
            data: Block contents.
            context: File being processed, reported on collision.

        Returns:
            The block's fingerprint.

        Raises:
            CollisionError: If a different block already has this fingerprint.
            StoreSealedError: If the store has been sealed.
        """
        data = bytes(data)
        key = self._fingerprint(data)
        with self._lock:
            if self._sealed:
                raise StoreSealedError("Chunk store is sealed")
            existing = self._chunks.get(key)
            if existing is None:
                self._chunks[key] = data
                self._stored_bytes += len(data)
                logger.debug("Stored chunk %s (%d bytes)", key, len(data))
                return key
            if existing != data:
                logger.error("Fingerprint collision on %s while processing %s", key, context)
                raise CollisionError(key, context)
            self._dedup_hits += 1
            return key

    def get(self, key: str) -> bytes:
        """Retrieve a block.

        Raises:
            UnknownChunkError: If the fingerprint is absent.
        """
        try:
            return self._chunks[key]
        except KeyError:
            raise UnknownChunkError(key) from None

    def resolve(self, keys: Iterable[str]) -> list[bytes]:
        """Retrieve blocks for an ordered fingerprint sequence."""
        return [self.get(key) for key in keys]

    def exists(self, key: str) -> bool:
        """Check if a fingerprint is stored."""
        return key in self._chunks

    def items(self) -> list[tuple[str, bytes]]:
        """Return a snapshot of (fingerprint, bytes) pairs sorted by fingerprint."""
        with self._lock:
            return sorted(self._chunks.items())

    def seal(self) -> None:
        """Reject any further writes."""
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def dedup_hits(self) -> int:
        """Number of put() calls answered by an already-stored block."""
        return self._dedup_hits

    @property
    def stored_bytes(self) -> int:
        """Total size of unique blocks held."""
        return self._stored_bytes

    def __contains__(self, key: object) -> bool:
        return key in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)
