"""Deterministic directory walk shared by the scanner and the pipeline.

Entries of each directory are visited in name order, depth first, so two
walks over an unchanged tree yield the same sequence. The version-control
directory at the top of the tree is never descended into.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

SkipHandler = Callable[[Path, OSError], None]

VCS_DIR_NAME = ".git"


class WalkCancelled(Exception):
    """Raised inside a walk once its cancel event is set."""


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """A non-directory entry found during a walk."""
    path: Path
    relative_path: str  # always "/"-separated
    is_regular: bool


def walk_tree(
    root: Path,
    cancel: Optional[threading.Event] = None,
    notice_level: int = logging.WARNING,
    on_skip: Optional[SkipHandler] = None,
) -> Iterator[WalkEntry]:
    """Yield every non-directory entry below ``root``.

    Symbolic links are reported with ``is_regular=False`` and never followed.
    A directory or entry that cannot be inspected is logged and skipped;
    ``on_skip`` is also called with its path and the error.

    Args:
        root: Directory to walk.
        cancel: Checked before every entry; raises WalkCancelled once set.
        notice_level: Log level for skipped special directories.
        on_skip: Called for every unreadable directory or entry.
    """
    yield from _walk_directory(Path(root), "", cancel, notice_level, on_skip)


def _walk_directory(
    directory: Path,
    prefix: str,
    cancel: Optional[threading.Event],
    notice_level: int,
    on_skip: Optional[SkipHandler],
) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        _skip(directory, exc, on_skip, "skipping unreadable directory %s: %s")
        return

    for entry in entries:
        if cancel is not None and cancel.is_set():
            raise WalkCancelled(str(directory))

        relative = f"{prefix}{entry.name}"
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            _skip(Path(entry.path), exc, on_skip, "skipping %s: %s")
            continue

        if is_dir:
            if not prefix and entry.name == VCS_DIR_NAME:
                logger.log(notice_level, "ignoring git repository %s", entry.path)
                continue
            yield from _walk_directory(Path(entry.path), f"{relative}/", cancel, notice_level, on_skip)
            continue

        try:
            is_regular = entry.is_file(follow_symlinks=False)
        except OSError as exc:
            _skip(Path(entry.path), exc, on_skip, "skipping %s: %s")
            continue

        yield WalkEntry(path=Path(entry.path), relative_path=relative, is_regular=is_regular)


def _skip(path: Path, exc: OSError, on_skip: Optional[SkipHandler], message: str) -> None:
    logger.warning(message, path, exc)
    if on_skip is not None:
        on_skip(path, exc)
