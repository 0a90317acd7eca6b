"""Test fixtures that build source trees on disk.

Each fixture knows the files it created and the manifest lines a run over
it should produce.
"""
from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from multisum.core.config import DigestAlgorithm, PrintMode


@dataclass
class SourceTree:
    """A directory of files with known contents.

    ``files`` maps "/"-separated relative paths to contents; ``links`` maps
    symlink paths to their targets. Files under ``.git`` are created but are
    not expected in any manifest.
    """
    files: dict[str, bytes] = field(default_factory=dict)
    links: dict[str, str] = field(default_factory=dict)
    root: Optional[Path] = None

    def create(self, base_path: Path) -> Path:
        root = base_path
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in self.files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        for relative, target in self.links.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            os.symlink(target, path)
        self.root = root
        return root

    def expected_paths(self) -> list[str]:
        """Regular files outside .git, in name-ordered depth-first walk order."""
        paths = [p for p in self.files if not p.startswith(".git/")]
        return sorted(paths, key=lambda p: p.split("/"))

    def expected_lines(self, algorithm: DigestAlgorithm, mode: PrintMode = PrintMode.BINARY) -> list[str]:
        return [
            f"{hashlib.new(algorithm.value, self.files[p]).hexdigest()} {mode.marker}{p}"
            for p in self.expected_paths()
        ]


def hello_world_tree() -> SourceTree:
    return SourceTree(files={"a.txt": b"hello", "sub/b.txt": b"world"})


def mixed_tree() -> SourceTree:
    """Nested directories, a .git directory, a symlink and an empty file."""
    return SourceTree(
        files={
            "zeta.bin": bytes(range(256)) * 64,
            "alpha/one.txt": b"one\n",
            "alpha/two.txt": b"two\n",
            "alpha/deep/three.txt": b"three\n",
            "beta/empty.dat": b"",
            "beta.txt": b"beta",
            ".git/HEAD": b"ref: refs/heads/main\n",
            ".git/config": b"[core]\n",
        },
        links={"link.txt": "beta.txt"},
    )


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()
