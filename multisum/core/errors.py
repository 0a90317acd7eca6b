"""Typed errors raised by the checksum core."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class MultisumError(Exception):
    """Base class for every fatal error of a run."""


class ConfigError(MultisumError, ValueError):
    """Invalid or contradictory configuration. Raised before any I/O."""


class ForeignFileError(MultisumError):
    """Target directory holds something that is not a generated manifest."""

    def __init__(self, relative_path: str):
        super().__init__(f"unexpected file {relative_path} found in target directory")
        self.relative_path = relative_path


class ChecksumIOError(MultisumError):
    """Open/read/write/remove failure on a source or target path."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
