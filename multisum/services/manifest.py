"""Per-algorithm manifest output."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional

from ..core.config import DigestAlgorithm, PrintMode
from ..core.errors import ChecksumIOError

logger = logging.getLogger(__name__)


def format_manifest_line(digest: str, relative_path: str, mode: PrintMode) -> str:
    """``<hex> <marker><path>`` with a trailing newline."""
    return f"{digest} {mode.marker}{relative_path}\n"


class ManifestWriter:
    """Owns one manifest file and one digest accumulator.

    Bytes of the current input file go in through :meth:`update`; calling
    :meth:`write_checksum` appends the line for that file and starts a fresh
    accumulator for the next one.
    """

    def __init__(self, target_dir: Path, algorithm: DigestAlgorithm, mode: PrintMode):
        self._algorithm = algorithm
        self._mode = mode
        self._path = Path(target_dir) / algorithm.manifest_name
        self._digest = algorithm.new()
        self._file: Optional[IO[str]] = None
        self._lines = 0

    @property
    def algorithm(self) -> DigestAlgorithm:
        return self._algorithm

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lines_written(self) -> int:
        return self._lines

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def update(self, data: bytes) -> None:
        self._digest.update(data)

    def hexdigest(self) -> str:
        """Digest of everything fed in since the last line."""
        return self._digest.hexdigest()

    def open(self) -> None:
        """Create (or truncate) the manifest file."""
        if self._file is not None:
            raise RuntimeError(f"{self._path} is already open")
        try:
            # surrogateescape keeps undecodable file names byte-exact
            self._file = self._path.open(
                "w", encoding="utf-8", errors="surrogateescape", newline="\n"
            )
        except OSError as exc:
            raise ChecksumIOError(f"failed to create {self._path}: {exc}", self._path) from exc
        logger.debug("opened %s", self._path)

    def write_checksum(self, relative_path: str) -> None:
        """Append the line for ``relative_path`` and reset the accumulator."""
        if self._file is None:
            raise RuntimeError(f"{self._path} is not open")
        line = format_manifest_line(self._digest.hexdigest(), relative_path, self._mode)
        try:
            self._file.write(line)
        except OSError as exc:
            raise ChecksumIOError(f"failed to write {self._path}: {exc}", self._path) from exc
        finally:
            self._digest = self._algorithm.new()
        self._lines += 1

    def close(self) -> None:
        """Flush and close. A writer that was never opened is a no-op."""
        if self._file is None:
            return
        handle, self._file = self._file, None
        try:
            handle.close()
        except OSError as exc:
            raise ChecksumIOError(f"failed to close {self._path}: {exc}", self._path) from exc
        logger.debug("closed %s after %d lines", self._path, self._lines)

    def __enter__(self) -> "ManifestWriter":
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()
