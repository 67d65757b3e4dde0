"""Emit a finished build as a self-contained Python module.

Two flavours are supported:
- plain: FILE_LIST, size(name) and read(name), returning None for unknown
  names. Depends on nothing.
- kv: FILE_LIST, exists(), size(), read() and read_fragments() with byte-range
  support, raising PathNotFoundError for unknown names. Imports crunchstore.

Each unique chunk becomes one module-level bytes constant; files reference
those constants, so shared chunks are emitted once.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crunchstore.core.registry import FileRegistry
    from crunchstore.core.store import ChunkStore

logger = logging.getLogger(__name__)


class EmitMode(str, Enum):
    """Flavour of generated module."""

    PLAIN = "plain"
    KV = "kv"


_COMMON = '''

def _key(name):
    if name in _SIZES:
        return name
    return name.lstrip("/")


def file_chunks(name):
    return _FILE_CHUNKS.get(_key(name))
'''

_PLAIN_SKELETON = _COMMON + '''

def size(name):
    return _SIZES.get(_key(name))


def read(name):
    chunks = file_chunks(name)
    if chunks is None:
        return None
    return b"".join(chunks)
'''

_KV_SKELETON = _COMMON + '''

def exists(name):
    return _key(name) in _SIZES


def size(name):
    try:
        return _SIZES[_key(name)]
    except KeyError:
        raise PathNotFoundError(name) from None


def read_fragments(name, offset=0, length=None):
    chunks = file_chunks(name)
    if chunks is None:
        raise PathNotFoundError(name)
    available = max(_SIZES[_key(name)] - offset, 0)
    length = available if length is None else min(length, available)
    return read_range(chunks, offset, length)


def read(name, offset=0, length=None):
    return b"".join(read_fragments(name, offset, length))
'''

_KV_IMPORTS = """from crunchstore.core.errors import PathNotFoundError
from crunchstore.core.ranges import read_range
"""


def chunk_name(key: str) -> str:
    """Return the module constant name holding a chunk."""
    return f"_D_{key}"


def generated_by_header(generated_by: str, now: datetime | None = None) -> str:
    """Return the comment header placed at the top of generated modules.

    Args:
        generated_by: Tool or command line that produced the module.
        now: Creation time; None omits the date line.
    """
    lines = [f"# Generated by: {generated_by}"]
    if now is not None:
        lines.append(f"# Creation date: {now.strftime('%a, %d %b %Y %H:%M:%S GMT')}")
    return "\n".join(lines) + "\n"


def emit_module(
    store: ChunkStore,
    registry: FileRegistry,
    mode: EmitMode | str = EmitMode.PLAIN,
    generated_by: str = "crunchstore",
    timestamp: bool = True,
) -> str:
    """Render a build as Python source.

    Args:
        store: Chunk store holding every referenced chunk.
        registry: Files to expose, emitted in registration order.
        mode: "plain" or "kv".
        generated_by: Text for the header's "Generated by" line.
        timestamp: Whether to include the creation date (disable for
            reproducible output).

    Returns:
        Python module source text.
    """
    mode = EmitMode(mode)
    parts = [
        generated_by_header(generated_by, datetime.now(UTC) if timestamp else None),
        '"""Files embedded by crunchstore."""\n\n',
    ]
    if mode is EmitMode.KV:
        parts.append(_KV_IMPORTS + "\n")

    chunks = store.items()
    for key, data in chunks:
        parts.append(f"{chunk_name(key)} = {data!r}\n")

    entries = registry.entries()
    parts.append("\n_FILE_CHUNKS = {\n")
    for entry in entries:
        refs = "".join(f"{chunk_name(key)}, " for key in entry.fingerprints)
        parts.append(f"    {entry.path!r}: ({refs}),\n")
    parts.append("}\n\n_SIZES = {\n")
    for entry in entries:
        parts.append(f"    {entry.path!r}: {entry.size},\n")
    parts.append("}\n\nFILE_LIST = [\n")
    for entry in entries:
        parts.append(f"    {entry.path!r},\n")
    parts.append("]\n")

    parts.append(_KV_SKELETON if mode is EmitMode.KV else _PLAIN_SKELETON)
    logger.info("Emitted %s module: %d files, %d chunks", mode.value, len(entries), len(chunks))
    return "".join(parts)
