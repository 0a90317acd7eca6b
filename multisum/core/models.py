"""Run state models."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class PipelineState(Enum):
    """Phases of a checksum run."""
    IDLE = "idle"
    VALIDATING = "validating"
    RESETTING = "resetting"
    SCANNING = "scanning+writing"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


class AtomicCounter:
    """Monotonic counter, incremented by one thread and read by others."""

    def __init__(self, initial: int = 0):
        self._value = initial
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Processed count and scanner state read at one instant."""
    processed: int
    scanning: bool
    total: Optional[int] = None

    @property
    def percentage(self) -> Optional[float]:
        """Share of discovered files processed. Not clamped to 100."""
        if self.scanning or self.total is None:
            return None
        if self.total == 0:
            return 100.0
        return 100.0 * self.processed / self.total


@dataclass(slots=True)
class RunStats:
    """Statistics for a finished (or failed) run."""
    processed: int = 0
    discovered: Optional[int] = None
    skipped: int = 0  # non regular files and unreadable entries
    manifests: dict[str, Path] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    def summary(self) -> dict[str, object]:
        return {
            "processed": self.processed,
            "discovered": self.discovered,
            "skipped": self.skipped,
            "manifests": sorted(self.manifests),
        }
