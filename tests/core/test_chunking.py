"""Tests for fixed-size chunking and fingerprints."""

import hashlib
import os

import pytest

from crunchstore.core.chunking import (
    FINGERPRINT_LENGTH,
    FileChunker,
    fingerprint,
    split_blocks,
)
from crunchstore.core.config import SECTOR_SIZE
from crunchstore.core.errors import DuplicatePathError
from crunchstore.core.registry import FileRegistry
from crunchstore.core.store import ChunkStore


@pytest.fixture
def store() -> ChunkStore:
    return ChunkStore()


@pytest.fixture
def registry() -> FileRegistry:
    return FileRegistry()


@pytest.fixture
def chunker(store: ChunkStore, registry: FileRegistry) -> FileChunker:
    return FileChunker(store, registry)


class TestFingerprint:
    """Tests for the fingerprint function."""

    def test_fixed_length(self) -> None:
        """Fingerprints have the same length for any input size."""
        for data in (b"", b"x", os.urandom(SECTOR_SIZE), os.urandom(100_000)):
            assert len(fingerprint(data)) == FINGERPRINT_LENGTH

    def test_deterministic(self) -> None:
        """Equal inputs always produce equal fingerprints."""
        assert fingerprint(b"repeated content") == fingerprint(b"repeated content")

    def test_distinct_inputs(self) -> None:
        """Different inputs produce different fingerprints in practice."""
        assert fingerprint(b"a") != fingerprint(b"b")

    def test_matches_md5(self) -> None:
        """Fingerprint is the MD5 hex digest."""
        data = b"test data for hashing"
        assert fingerprint(data) == hashlib.md5(data).hexdigest()


class TestSplitBlocks:
    """Tests for split_blocks()."""

    def test_empty_data_produces_no_blocks(self) -> None:
        assert list(split_blocks(b"")) == []

    def test_small_data_produces_one_block(self) -> None:
        assert list(split_blocks(b"small data")) == [b"small data"]

    def test_exact_multiple_has_no_short_block(self) -> None:
        """A buffer of exactly two sectors yields two full blocks."""
        data = os.urandom(2 * SECTOR_SIZE)
        blocks = list(split_blocks(data))
        assert [len(b) for b in blocks] == [SECTOR_SIZE, SECTOR_SIZE]

    def test_ten_thousand_bytes(self) -> None:
        """10000 bytes split into 4096 + 4096 + 1808."""
        data = os.urandom(10000)
        assert [len(b) for b in split_blocks(data)] == [4096, 4096, 1808]

    @pytest.mark.parametrize("size", [1, 4095, 4096, 4097, 8191, 8192, 8193, 50_000])
    def test_blocks_complete(self, size: int) -> None:
        """Lengths sum to the input size; only the last block may be short."""
        data = os.urandom(size)
        blocks = list(split_blocks(data))
        assert sum(len(b) for b in blocks) == size
        assert all(len(b) == SECTOR_SIZE for b in blocks[:-1])
        assert 0 < len(blocks[-1]) <= SECTOR_SIZE
        assert b"".join(blocks) == data

    def test_custom_sector_size(self) -> None:
        assert list(split_blocks(b"abcdefg", sector_size=3)) == [b"abc", b"def", b"g"]


class TestFileChunker:
    """Tests for FileChunker.chunk_file()."""

    def test_registers_entry(self, chunker: FileChunker, registry: FileRegistry) -> None:
        data = os.urandom(10000)
        entry = chunker.chunk_file("a.bin", data)

        assert entry.path == "a.bin"
        assert entry.size == 10000
        assert entry.chunk_count == 3
        assert registry.lookup("a.bin") == entry

    def test_fingerprints_resolve_to_original(
        self, chunker: FileChunker, store: ChunkStore
    ) -> None:
        """Every referenced fingerprint is in the store, in file order."""
        data = os.urandom(9000)
        entry = chunker.chunk_file("a.bin", data)

        assert all(store.exists(key) for key in entry.fingerprints)
        assert b"".join(store.resolve(entry.fingerprints)) == data

    def test_empty_file(self, chunker: FileChunker, store: ChunkStore) -> None:
        """A zero-byte file has no chunks and size 0."""
        entry = chunker.chunk_file("empty", b"")

        assert entry.fingerprints == ()
        assert entry.size == 0
        assert len(store) == 0

    def test_duplicate_path_rejected(self, chunker: FileChunker, store: ChunkStore) -> None:
        """A second registration fails before any chunk is stored."""
        chunker.chunk_file("a.bin", b"first")

        with pytest.raises(DuplicatePathError, match="a.bin"):
            chunker.chunk_file("a.bin", b"second")
        assert len(store) == 1

    def test_shared_block_deduplicated(self, chunker: FileChunker, store: ChunkStore) -> None:
        """Two files sharing an aligned block store it once."""
        shared = os.urandom(SECTOR_SIZE)
        first = chunker.chunk_file("one", shared + b"tail one")
        second = chunker.chunk_file("two", shared + b"tail two")

        assert first.fingerprints[0] == second.fingerprints[0]
        assert len(store) == 3
        assert store.dedup_hits == 1
