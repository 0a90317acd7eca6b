"""Periodic progress reporting.

Combines the live processed-file counter with the scanner's state into a
single status line, redrawn in place at a fixed cadence.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.models import AtomicCounter, ProgressSnapshot
from ..core.protocols import ProgressReporter, TotalCountSource

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.1  # seconds


def format_status(snapshot: ProgressSnapshot) -> str:
    """Render a snapshot as ``status: N/?`` or ``status: N/M (P%)``."""
    percentage = snapshot.percentage
    if percentage is None:
        return f"status: {snapshot.processed}/?, scan in progress..."
    return f"status: {snapshot.processed}/{snapshot.total} ({percentage:.2f}%)"


class ProgressAggregator:
    """Emits a status line every ``interval`` seconds until stopped.

    Only reads its inputs: the counter is owned by the pipeline thread and
    the scanner state by the scanner thread.
    """

    def __init__(
        self,
        processed: AtomicCounter,
        scanner: TotalCountSource,
        reporter: ProgressReporter,
        interval: float = DEFAULT_INTERVAL,
    ):
        """Initialize the aggregator.

        Args:
            processed: Counter incremented once per checksummed file.
            scanner: Source of the discovered total.
            reporter: Where status lines are drawn.
            interval: Seconds between emissions.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._processed = processed
        self._scanner = scanner
        self._reporter = reporter
        self._interval = interval
        self._quit = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def snapshot(self) -> ProgressSnapshot:
        """Read the counter and scanner state once."""
        processed = self._processed.value
        total = self._scanner.count()
        scanning = self._scanner.is_running() or total is None
        return ProgressSnapshot(processed=processed, scanning=scanning, total=total)

    def status_line(self) -> str:
        return format_status(self.snapshot())

    def emit(self) -> None:
        self._reporter.update_status(self.status_line())

    def start(self) -> None:
        """Draw the first line now and keep redrawing on a background thread."""
        if self._thread is not None:
            raise RuntimeError("aggregator already started")
        self._reporter.start_status()
        self.emit()
        self._thread = threading.Thread(target=self._loop, name="multisum-progress", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Halt emissions. An emission already in progress completes first."""
        self._quit.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def print_final(self) -> None:
        """Leave one last status snapshot on screen."""
        self._reporter.end_status(self.status_line())

    def _loop(self) -> None:
        while not self._quit.wait(self._interval):
            try:
                self.emit()
            except Exception:
                logger.exception("progress update failed")
                return
