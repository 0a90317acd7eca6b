"""Background counting of the files a run will process."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from .walk import WalkCancelled, walk_tree

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Counts regular files under a root on a background thread.

    The count is published exactly once, when the walk completes. A
    cancelled or failed scan leaves it unknown (``None``). Readers on other
    threads call :meth:`is_running` and :meth:`count` without blocking.

    Usage:
        scanner = DirectoryScanner()
        scanner.start(source_dir)
        ...
        if not scanner.is_running():
            total = scanner.count()
        scanner.stop()
    """

    def __init__(self) -> None:
        self._thread: Optional[threading.Thread] = None
        self._cancel = threading.Event()
        self._total: Optional[int] = None

    def start(self, root: Path) -> None:
        """Launch the counting pass and return immediately."""
        if self._thread is not None:
            raise RuntimeError("scanner already started")
        self._thread = threading.Thread(
            target=self._run,
            args=(Path(root),),
            name="multisum-scanner",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Request cancellation. Does not wait for the thread to finish."""
        self._cancel.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the scan thread exits. Returns False on timeout."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and self._total is None

    def count(self) -> Optional[int]:
        """Total regular files, or None until the scan has completed."""
        return self._total

    def _run(self, root: Path) -> None:
        try:
            total = self._scan(root)
        except WalkCancelled:
            logger.debug("scan of %s cancelled", root)
            return
        except Exception:
            logger.exception("scan of %s failed", root)
            return
        self._total = total
        logger.debug("scan of %s found %d files", root, total)

    def _scan(self, root: Path) -> int:
        counter = 0
        for entry in walk_tree(root, cancel=self._cancel, notice_level=logging.DEBUG):
            if not entry.is_regular:
                logger.debug("not counting non regular file %s", entry.relative_path)
                continue
            counter += 1
        return counter
