"""Exceptions raised by the crunchstore core.

Build-time errors (collision, duplicate path, sealed store) are fatal to the
build that raised them. Read-time range requests never raise for windows that
run past the end of a file; only unknown paths do, via PathNotFoundError.
"""

from __future__ import annotations


class CrunchError(Exception):
    """Base class for all crunchstore errors."""


class CollisionError(CrunchError):
    """Two different blocks produced the same fingerprint.

    Attributes:
        fingerprint: The fingerprint shared by both blocks.
        context: The file being processed when the collision surfaced.
    """

    def __init__(self, fingerprint: str, context: str | None = None) -> None:
        self.fingerprint = fingerprint
        self.context = context
        where = f" in file {context}" if context else ""
        super().__init__(f"Fingerprint collision on {fingerprint}{where}")


class DuplicatePathError(CrunchError):
    """A logical path was registered twice."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path already registered: {path}")


class UnknownChunkError(CrunchError):
    """A fingerprint was requested that the store does not hold.

    Only reachable through misuse: registered files always reference
    fingerprints returned by ChunkStore.put().
    """

    def __init__(self, fingerprint: str) -> None:
        self.fingerprint = fingerprint
        super().__init__(f"Chunk not found: {fingerprint}")


class PathNotFoundError(CrunchError):
    """Raised by query surfaces when a path is not in the registry."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class StoreSealedError(CrunchError):
    """Raised on any write after a build has been sealed."""
