"""Protocol definitions (interfaces) shared by the services."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol

from .models import RunStats


class TotalCountSource(Protocol):
    """Something that discovers the total number of files.

    Implementations:
    - DirectoryScanner: counts regular files on a background thread
    """

    @abstractmethod
    def is_running(self) -> bool:
        """Whether counting has not finished yet."""
        ...

    @abstractmethod
    def count(self) -> Optional[int]:
        """Final count, or None while unknown."""
        ...


class DigestSink(Protocol):
    """Anything accepting bytes the way a hashlib object does."""

    def update(self, data: bytes) -> None:
        ...


class ProgressReporter(Protocol):
    """Interface for operator-facing output."""

    @abstractmethod
    def start_status(self) -> None:
        """Begin an in-place redrawn status line."""
        ...

    @abstractmethod
    def update_status(self, line: str) -> None:
        """Replace the current status line."""
        ...

    @abstractmethod
    def end_status(self, final_line: Optional[str] = None) -> None:
        """Stop redrawing; optionally leave a final line behind."""
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def warning(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...

    @abstractmethod
    def print_stats(self, stats: RunStats) -> None:
        """Print the summary of a run."""
        ...
