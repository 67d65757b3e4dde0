"""Build configuration for crunchstore."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Simulates sector-aligned reads; tunable, not part of the correctness contract
SECTOR_SIZE = 4096


@dataclass
class BuildConfig:
    """Configuration for a single build pass.

    Attributes:
        sector_size: Size of each fixed chunk window in bytes.
        extensions: File extensions to include (empty means all files).
        ignore_patterns: Extra gitignore-style patterns to skip during traversal.
        ignore_file: File of further patterns, one per line ("#" starts a comment).
        workers: Number of threads used to chunk files (1 = sequential).
    """

    sector_size: int = SECTOR_SIZE
    extensions: tuple[str, ...] = ()
    ignore_patterns: list[str] = field(default_factory=list)
    ignore_file: Path | None = None
    workers: int = 1

    def __post_init__(self) -> None:
        """Normalize extensions and validate sizes."""
        if self.sector_size <= 0:
            raise ValueError(f"sector_size must be positive, got {self.sector_size}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        self.extensions = tuple(ext.lstrip(".") for ext in self.extensions if ext.lstrip("."))

