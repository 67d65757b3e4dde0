"""Byte-range reconstruction over an ordered list of chunks.

The chunks of a file are laid end to end as contiguous ranges
[chunk_start, chunk_start + len(chunk)). A read request (offset, length) is
answered by folding over the chunks left to right while carrying a Window
record, classifying each chunk against what is left of the request:

| Overlap   | Chunk vs. remaining window          | Emitted            |
|-----------|-------------------------------------|--------------------|
| EXHAUSTED | window already satisfied            | nothing (stop)     |
| BEFORE    | chunk ends at or before window start| nothing            |
| AFTER     | chunk starts at or after window end | nothing            |
| COVER     | chunk covers the whole remainder    | middle slice       |
| SUFFIX    | window starts inside, runs past end | tail of the chunk  |
| INSIDE    | chunk lies entirely within window   | whole chunk        |
| PREFIX    | window starts before, ends inside   | head of the chunk  |

Windows that run past the end of the data yield a short result rather than
an error; callers that want a strict read clamp the length first.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum, auto


class Overlap(Enum):
    """How a chunk relates to the still-unsatisfied part of a read window."""

    EXHAUSTED = auto()
    BEFORE = auto()
    AFTER = auto()
    COVER = auto()
    SUFFIX = auto()
    INSIDE = auto()
    PREFIX = auto()


@dataclass(frozen=True)
class Window:
    """State carried through the fold.

    Attributes:
        offset: Absolute file offset of the first byte still wanted.
        chunk_start: Absolute file offset of the chunk about to be visited.
        length: Number of bytes still wanted.
    """

    offset: int
    chunk_start: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


def classify(window: Window, chunk_len: int) -> Overlap:
    """Classify a chunk of chunk_len bytes at window.chunk_start."""
    if window.length == 0:
        return Overlap.EXHAUSTED
    chunk_start = window.chunk_start
    chunk_end = chunk_start + chunk_len
    if chunk_end <= window.offset:
        return Overlap.BEFORE
    if window.end <= chunk_start:
        return Overlap.AFTER
    if chunk_start <= window.offset:
        return Overlap.COVER if chunk_end >= window.end else Overlap.SUFFIX
    return Overlap.INSIDE if chunk_end <= window.end else Overlap.PREFIX


def _slice(window: Window, chunk: bytes, overlap: Overlap) -> bytes | None:
    """Return the fragment of chunk selected by overlap, or None."""
    rel = window.offset - window.chunk_start
    if overlap is Overlap.COVER:
        return chunk[rel : rel + window.length]
    if overlap is Overlap.SUFFIX:
        return chunk[rel:]
    if overlap is Overlap.INSIDE:
        return chunk
    if overlap is Overlap.PREFIX:
        return chunk[: window.end - window.chunk_start]
    return None


def step(window: Window, chunk: bytes) -> tuple[bytes | None, Window]:
    """Advance the fold by one chunk.

    Returns:
        The emitted fragment (None when nothing overlaps) and the next window.
    """
    chunk_len = len(chunk)
    fragment = _slice(window, chunk, classify(window, chunk_len))
    next_start = window.chunk_start + chunk_len
    if fragment is None:
        return None, replace(window, chunk_start=next_start)
    # The fragment begins at whichever is later: the window or the chunk
    fragment_end = max(window.offset, window.chunk_start) + len(fragment)
    return fragment, Window(
        offset=fragment_end,
        chunk_start=next_start,
        length=window.length - len(fragment),
    )


def read_range(chunks: Sequence[bytes], offset: int, length: int) -> list[bytes]:
    """Select the fragments of chunks covering [offset, offset + length).

    Args:
        chunks: Ordered chunk contents of one file.
        offset: First byte wanted.
        length: Number of bytes wanted.

    Returns:
        Fragments in file order whose concatenation is the requested range,
        truncated at the end of the data.

    Raises:
        ValueError: If offset or length is negative.
    """
    if offset < 0 or length < 0:
        raise ValueError(f"offset and length must be non-negative, got ({offset}, {length})")

    fragments: list[bytes] = []
    window = Window(offset=offset, chunk_start=0, length=length)
    for chunk in chunks:
        if window.length == 0:
            break
        fragment, window = step(window, chunk)
        if fragment is not None:
            fragments.append(fragment)
    return fragments
