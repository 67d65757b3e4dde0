"""Directory traversal feeding (path, bytes) pairs into a build.

This module provides:
- IgnorePatterns: gitignore-style pattern matching for skipped paths
- DEFAULT_IGNORE_PATTERNS: VCS and editor droppings never worth embedding
- matches_extension(): extension whitelist check
- walk_files(): recursive, sorted traversal of a directory tree
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS = [
    ".git",
    ".git/**",
    ".hg",
    ".hg/**",
    ".svn",
    ".svn/**",
    ".DS_Store",
    "Thumbs.db",
    "*.swp",
    "*.swo",
]


class IgnorePatterns:
    """Handles ignore pattern matching for relative paths."""

    def __init__(self, patterns: Iterable[str] | None = None, use_defaults: bool = True) -> None:
        """Initialize with patterns.

        Args:
            patterns: Extra gitignore-style patterns.
            use_defaults: Whether to start from DEFAULT_IGNORE_PATTERNS.
        """
        self._patterns = list(DEFAULT_IGNORE_PATTERNS) if use_defaults else []
        if patterns:
            self._patterns.extend(patterns)

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def load_from_file(self, path: Path) -> None:
        """Load patterns from an ignore file, skipping comments and blanks."""
        if path.exists():
            with open(path, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#"):
                        self._patterns.append(line)

    def should_ignore(self, rel_path: str, is_dir: bool = False) -> bool:
        """Check if a relative path should be ignored.

        Args:
            rel_path: Path relative to the traversal root, using "/".
            is_dir: Whether the path names a directory.

        Returns:
            True if the path should be ignored.
        """
        name = rel_path.rsplit("/", 1)[-1]
        for pattern in self._patterns:
            # Directory-only patterns (ending with /)
            if pattern.endswith("/"):
                if self._matches_directory(rel_path, pattern[:-1], is_dir):
                    return True
            elif "**" in pattern:
                if fnmatch.fnmatch(rel_path, pattern):
                    return True
            elif fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
                return True
        return False

    @staticmethod
    def _matches_directory(rel_path: str, pattern: str, is_dir: bool) -> bool:
        """Match a directory-only pattern against every directory on rel_path.

        The last component only counts when rel_path itself is a directory.
        """
        parts = rel_path.split("/")
        depth = len(parts) if is_dir else len(parts) - 1
        for i in range(depth):
            if fnmatch.fnmatch(parts[i], pattern) or fnmatch.fnmatch("/".join(parts[: i + 1]), pattern):
                return True
        return False


def get_extension(name: str) -> str | None:
    """Return the text after the last dot of a file name, if any.

    A leading dot (".profile") does not start an extension.
    """
    base = name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    if dot < 1:
        return None
    return base[dot + 1 :]


def matches_extension(name: str, extensions: Iterable[str]) -> bool:
    """Check a file name against an extension whitelist.

    An empty whitelist lets everything through, and files without an
    extension are always included.
    """
    allowed = {ext.lstrip(".") for ext in extensions}
    if not allowed:
        return True
    ext = get_extension(name)
    return ext is None or ext in allowed


def walk_files(
    root: Path | str,
    extensions: Iterable[str] = (),
    ignore: IgnorePatterns | None = None,
) -> Iterator[tuple[str, bytes]]:
    """Walk a directory tree and yield file contents.

    Directories and files are visited in sorted order so repeated builds
    over the same tree see the same sequence. Symlinks are skipped.

    Args:
        root: Directory to traverse.
        extensions: Extension whitelist (empty means all files).
        ignore: Ignore patterns (defaults to IgnorePatterns()).

    Yields:
        (relative_path, contents) pairs with "/"-separated relative paths.

    Raises:
        NotADirectoryError: If root is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    ignore = ignore if ignore is not None else IgnorePatterns()
    extensions = tuple(extensions)

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        kept = []
        for dirname in sorted(dirnames):
            if (current / dirname).is_symlink() or ignore.should_ignore(prefix + dirname, is_dir=True):
                logger.debug("Skipping directory %s", prefix + dirname)
                continue
            kept.append(dirname)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = prefix + filename
            full_path = current / filename
            if full_path.is_symlink() or ignore.should_ignore(rel_path):
                logger.debug("Skipping %s", rel_path)
                continue
            if not matches_extension(filename, extensions):
                continue
            yield rel_path, full_path.read_bytes()
