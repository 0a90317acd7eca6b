"""Checksum pipeline: validate, reset, scan, hash and write manifests.

State machine:

    IDLE -> VALIDATING -> RESETTING -> SCANNING -> DRAINING -> DONE
                                         (FAILED from any state)

The source tree is walked exactly once. Each regular file is read once and
every chunk is fed to all digest accumulators before the next chunk, after
which every manifest gets its line. Manifests therefore advance in lockstep:
line k of every manifest describes the same file.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..core.config import ChecksumConfig
from ..core.errors import ChecksumIOError
from ..core.models import AtomicCounter, PipelineState, RunStats
from ..core.protocols import ProgressReporter
from ..engines.digest import DEFAULT_CHUNK_SIZE, BroadcastWriter, stream_file
from ..logging.rich_logger import QuietProgressReporter
from .manifest import ManifestWriter
from .progress import DEFAULT_INTERVAL, ProgressAggregator
from .repo_guard import RepoGuard
from .scanner import DirectoryScanner
from .walk import walk_tree

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Tuning knobs that do not change the output."""
    progress_interval: float = DEFAULT_INTERVAL
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass
class _RunContext:
    writers: list[ManifestWriter] = field(default_factory=list)
    skipped: int = 0


class ChecksumPipeline:
    """Generates one manifest per configured digest algorithm."""

    def __init__(
        self,
        config: ChecksumConfig,
        reporter: Optional[ProgressReporter] = None,
        options: Optional[PipelineOptions] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Validated run configuration.
            reporter: Operator output; silent when omitted.
            options: Progress cadence and read chunk size.
        """
        self._config = config
        self._reporter = reporter if reporter is not None else QuietProgressReporter()
        self._options = options or PipelineOptions()
        self._state = PipelineState.IDLE
        self._processed = AtomicCounter()
        self._guard = RepoGuard(config.target_dir, config.recognized_manifest_names())
        self._scanner = DirectoryScanner()
        self._aggregator = ProgressAggregator(
            self._processed,
            self._scanner,
            self._reporter,
            interval=self._options.progress_interval,
        )

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def processed(self) -> int:
        return self._processed.value

    @property
    def scanner(self) -> DirectoryScanner:
        return self._scanner

    def run(self) -> RunStats:
        """Execute one full run.

        Raises:
            ForeignFileError: Target directory holds unrecognized files.
            ChecksumIOError: A source or target file operation failed.
        """
        if self._state is not PipelineState.IDLE:
            raise RuntimeError("a pipeline runs only once")

        started = time.monotonic()
        ctx = _RunContext()
        try:
            self._state = PipelineState.VALIDATING
            self._guard.validate()

            self._state = PipelineState.RESETTING
            self._guard.reset()

            self._state = PipelineState.SCANNING
            self._scan_and_write(ctx)
        except BaseException:
            self._state = PipelineState.FAILED
            raise
        self._state = PipelineState.DONE

        stats = RunStats(
            processed=self._processed.value,
            discovered=self._scanner.count(),
            skipped=ctx.skipped,
            manifests={w.algorithm.manifest_name: w.path for w in ctx.writers},
            elapsed_seconds=time.monotonic() - started,
        )
        logger.debug("run finished: %s", stats.summary())
        return stats

    def _scan_and_write(self, ctx: _RunContext) -> None:
        self._scanner.start(self._config.source_dir)
        try:
            self._aggregator.start()
        except BaseException:
            self._scanner.stop()
            raise

        try:
            self._write_manifests(ctx)
        finally:
            self._scanner.stop()
            self._aggregator.stop()
            self._aggregator.print_final()

    def _write_manifests(self, ctx: _RunContext) -> None:
        ctx.writers = [
            ManifestWriter(self._config.target_dir, algorithm, self._config.print_mode)
            for algorithm in self._config.algorithms
        ]
        try:
            for writer in ctx.writers:
                writer.open()
            self._checksum_tree(ctx)
        except BaseException:
            # flush whatever was written, keep the original error
            self._state = PipelineState.DRAINING
            self._drain(ctx.writers, raise_first=False)
            raise
        self._state = PipelineState.DRAINING
        self._drain(ctx.writers, raise_first=True)

    def _checksum_tree(self, ctx: _RunContext) -> None:
        broadcast = BroadcastWriter(ctx.writers)
        source = self._config.source_dir

        def count_unreadable(path: Path, exc: OSError) -> None:
            ctx.skipped += 1

        for entry in walk_tree(source, on_skip=count_unreadable):
            if not entry.is_regular:
                self._reporter.warning(f"skipping non regular file {entry.relative_path}")
                ctx.skipped += 1
                continue

            stream_file(entry.path, broadcast, self._options.chunk_size)
            for writer in ctx.writers:
                writer.write_checksum(entry.relative_path)
            self._processed.increment()

    def _drain(self, writers: list[ManifestWriter], raise_first: bool) -> None:
        """Close every writer; the first close error is raised if asked."""
        first_error: Optional[ChecksumIOError] = None
        for writer in writers:
            try:
                writer.close()
            except ChecksumIOError as exc:
                logger.error("%s", exc)
                if first_error is None:
                    first_error = exc
        if first_error is not None and raise_first:
            raise first_error
