"""File registry mapping logical paths to their chunk sequences."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass

from crunchstore.core.errors import DuplicatePathError, StoreSealedError


@dataclass(frozen=True)
class FileEntry:
    """A registered file: ordered chunk fingerprints plus total size."""

    path: str
    fingerprints: tuple[str, ...]
    size: int

    @property
    def chunk_count(self) -> int:
        """Return the number of chunks making up this file."""
        return len(self.fingerprints)


class FileRegistry:
    """Mapping from path to FileEntry with unique paths.

    Insertion order is preserved so that enumeration is stable.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}
        self._lock = threading.Lock()
        self._sealed = False

    def register(self, path: str, entry: FileEntry) -> None:
        """Register a file.

        Raises:
            DuplicatePathError: If path is already registered.
            StoreSealedError: If the registry has been sealed.
        """
        with self._lock:
            if self._sealed:
                raise StoreSealedError("File registry is sealed")
            if path in self._entries:
                raise DuplicatePathError(path)
            self._entries[path] = entry

    def lookup(self, path: str) -> FileEntry | None:
        return self._entries.get(path)

    def size_of(self, path: str) -> int | None:
        entry = self._entries.get(path)
        return entry.size if entry is not None else None

    def list_paths(self) -> set[str]:
        return set(self._entries)

    def entries(self) -> list[FileEntry]:
        """Return all entries in registration order."""
        return list(self._entries.values())

    def seal(self) -> None:
        """Reject any further registrations."""
        with self._lock:
            self._sealed = True

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
