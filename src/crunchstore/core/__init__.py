"""Core module - Fingerprinting, chunk store, registry and range reads."""

from crunchstore.core.build import Build, BuildStats
from crunchstore.core.chunking import (
    FINGERPRINT_LENGTH,
    FileChunker,
    fingerprint,
    split_blocks,
)
from crunchstore.core.config import SECTOR_SIZE, BuildConfig
from crunchstore.core.errors import (
    CollisionError,
    CrunchError,
    DuplicatePathError,
    PathNotFoundError,
    StoreSealedError,
    UnknownChunkError,
)
from crunchstore.core.ranges import Overlap, Window, classify, read_range
from crunchstore.core.registry import FileEntry, FileRegistry
from crunchstore.core.store import ChunkStore

__all__ = [
    # Build
    "Build",
    "BuildStats",
    # Chunking
    "FINGERPRINT_LENGTH",
    "FileChunker",
    "fingerprint",
    "split_blocks",
    # Config
    "SECTOR_SIZE",
    "BuildConfig",
    # Errors
    "CollisionError",
    "CrunchError",
    "DuplicatePathError",
    "PathNotFoundError",
    "StoreSealedError",
    "UnknownChunkError",
    # Ranges
    "Overlap",
    "Window",
    "classify",
    "read_range",
    # Registry
    "FileEntry",
    "FileRegistry",
    # Store
    "ChunkStore",
]
