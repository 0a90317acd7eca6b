"""Guarding and resetting the manifest output directory.

The target directory is a managed store: it may only contain previously
generated manifests, the version-control directory and the protected
attributes file. Validation is a dry run; reset removes everything else.
"""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable

from ..core.errors import ChecksumIOError, ForeignFileError
from .walk import VCS_DIR_NAME

logger = logging.getLogger(__name__)

PROTECTED_FILE_NAME = ".gitattributes"


def remove_tree_except(
    root: Path,
    keep_dirs: Iterable[str] = (VCS_DIR_NAME,),
    keep_files: Iterable[str] = (PROTECTED_FILE_NAME,),
) -> list[Path]:
    """Delete every entry directly under ``root`` except the kept names.

    Directories are removed recursively in one step. Kept directories are
    never descended into. Symbolic links are unlinked, not followed.

    Returns:
        Paths that were removed.

    Raises:
        ChecksumIOError: Listing or removal failed.
    """
    keep_dirs = frozenset(keep_dirs)
    keep_files = frozenset(keep_files)
    removed: list[Path] = []

    try:
        with os.scandir(root) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        raise ChecksumIOError(f"failed to list {root}: {exc}", Path(root)) from exc

    for entry in entries:
        path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=False):
                if entry.name in keep_dirs:
                    continue
                shutil.rmtree(path)
            else:
                if entry.name in keep_files:
                    continue
                path.unlink()
        except OSError as exc:
            raise ChecksumIOError(f"failed to remove {path}: {exc}", path) from exc
        logger.debug("removed %s", path)
        removed.append(path)

    return removed


class RepoGuard:
    """Validates and resets a manifest output directory.

    Args:
        target_dir: The output directory.
        recognized_names: Manifest filenames allowed anywhere in the tree.
    """

    def __init__(self, target_dir: Path, recognized_names: Iterable[str]):
        self._target_dir = Path(target_dir)
        self._recognized = frozenset(recognized_names)

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    @property
    def recognized_names(self) -> frozenset[str]:
        return self._recognized

    def validate(self) -> None:
        """Fail with ForeignFileError if anything unrecognized is present.

        Mutates nothing.
        """
        self._validate_directory(self._target_dir, "")

    def reset(self) -> list[Path]:
        """Remove everything except the version-control directory and protected file."""
        removed = remove_tree_except(self._target_dir)
        if removed:
            logger.info("removed %d entries from %s", len(removed), self._target_dir)
        return removed

    def _validate_directory(self, directory: Path, prefix: str) -> None:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            raise ChecksumIOError(f"failed to walk {directory}: {exc}", directory) from exc

        for entry in entries:
            relative = f"{prefix}{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                if not prefix and entry.name == VCS_DIR_NAME:
                    continue
                self._validate_directory(Path(entry.path), f"{relative}/")
                continue

            if not prefix and entry.name == PROTECTED_FILE_NAME:
                continue
            if entry.name not in self._recognized:
                raise ForeignFileError(relative)
