"""Single-pass multi-digest streaming.

One read of a file feeds every active digest accumulator: each chunk is
forwarded to all sinks before the next chunk is read.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..core.errors import ChecksumIOError
from ..core.protocols import DigestSink

DEFAULT_CHUNK_SIZE = 1024 * 1024


class BroadcastWriter:
    """File-like sink that fans every write out to several digest sinks."""

    def __init__(self, sinks: Iterable[DigestSink]):
        self._sinks = list(sinks)

    def write(self, data: bytes) -> int:
        for sink in self._sinks:
            sink.update(data)
        return len(data)


def stream_file(path: Path, writer: BroadcastWriter, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Stream the contents of ``path`` into ``writer``.

    Returns:
        Number of bytes read.

    Raises:
        ChecksumIOError: The file could not be opened or read.
    """
    total = 0
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                total += writer.write(chunk)
    except OSError as exc:
        raise ChecksumIOError(f"failed to read {path}: {exc}", path) from exc
    return total
