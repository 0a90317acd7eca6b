"""Tests for the background DirectoryScanner."""
import pytest
from pathlib import Path

from multisum.services.scanner import DirectoryScanner

from fixtures import SourceTree, mixed_tree


class TestDirectoryScanner:
    """Tests for DirectoryScanner."""

    @pytest.fixture
    def scanner(self):
        return DirectoryScanner()

    def test_not_started(self, scanner):
        assert scanner.is_running() is False
        assert scanner.count() is None

    def test_counts_regular_files(self, scanner, tmp_path: Path):
        """Symlinks and the .git directory are not counted."""
        tree = mixed_tree()
        tree.create(tmp_path / "src")

        scanner.start(tree.root)
        assert scanner.wait(timeout=10)

        assert scanner.is_running() is False
        assert scanner.count() == len(tree.expected_paths())

    def test_empty_tree(self, scanner, tmp_path: Path):
        scanner.start(tmp_path)
        assert scanner.wait(timeout=10)

        assert scanner.count() == 0

    def test_start_returns_immediately(self, scanner, tmp_path: Path):
        SourceTree(files={f"d{i}/f{j}": b"" for i in range(20) for j in range(20)}).create(tmp_path)

        scanner.start(tmp_path)
        # Either still running or done, never blocked on the caller
        assert scanner.is_running() or scanner.count() == 400
        assert scanner.wait(timeout=10)
        assert scanner.count() == 400

    def test_start_twice(self, scanner, tmp_path: Path):
        scanner.start(tmp_path)
        with pytest.raises(RuntimeError):
            scanner.start(tmp_path)
        scanner.wait(timeout=10)

    def test_cancelled_scan_leaves_count_unknown(self, scanner, tmp_path: Path):
        SourceTree(files={"a": b"1", "b": b"2"}).create(tmp_path)

        scanner.stop()
        scanner.start(tmp_path)
        assert scanner.wait(timeout=10)

        assert scanner.count() is None
        assert scanner.is_running() is False

    def test_stop_after_completion_keeps_count(self, scanner, tmp_path: Path):
        SourceTree(files={"a": b"1"}).create(tmp_path)

        scanner.start(tmp_path)
        assert scanner.wait(timeout=10)
        scanner.stop()

        assert scanner.count() == 1

    def test_missing_root_counts_zero(self, scanner, tmp_path: Path):
        """A walk error is logged and the subtree skipped, not fatal."""
        scanner.start(tmp_path / "missing")
        assert scanner.wait(timeout=10)

        assert scanner.count() == 0
