"""Tests for Rich progress reporter."""
import pytest
from io import StringIO
from pathlib import Path

from rich.console import Console

from multisum.core.models import RunStats
from multisum.logging.rich_logger import QuietProgressReporter, RichProgressReporter


def make_console() -> Console:
    return Console(file=StringIO(), width=120, force_terminal=False)


class TestRichProgressReporter:
    """Tests for Rich progress reporter."""

    @pytest.fixture
    def reporter(self):
        """Create a reporter writing to memory."""
        return RichProgressReporter(console=make_console())

    def output(self, reporter) -> str:
        return reporter.console.file.getvalue()

    def test_create_default(self):
        reporter = RichProgressReporter()
        assert reporter._quiet is False

    def test_status_lifecycle(self, reporter):
        reporter.start_status()
        reporter.update_status("status: 1/?, scan in progress...")
        reporter.update_status("status: 2/4 (50.00%)")
        reporter.end_status("status: 4/4 (100.00%)")

        assert reporter.last_status == "status: 4/4 (100.00%)"
        assert "status: 4/4 (100.00%)" in self.output(reporter)
        assert reporter._live is None

    def test_start_status_twice(self, reporter):
        reporter.start_status()
        live = reporter._live
        reporter.start_status()

        assert reporter._live is live
        reporter.end_status()

    def test_update_without_start(self, reporter):
        reporter.update_status("status: 0/?, scan in progress...")
        assert reporter.last_status == "status: 0/?, scan in progress..."

    def test_end_without_final_line(self, reporter):
        reporter.start_status()
        reporter.end_status()
        assert reporter._live is None

    def test_messages(self, reporter):
        reporter.info("Test message")
        reporter.success("Operation completed")
        reporter.warning("Something might be wrong")
        reporter.error("Something went wrong")

        out = self.output(reporter)
        for text in ("Test message", "Operation completed", "Something might be wrong", "Something went wrong"):
            assert text in out

    def test_markup_in_messages_is_literal(self, reporter):
        reporter.info("source photos[/old] and x[bold]y")
        reporter.error("failed: [red]boom")

        out = self.output(reporter)
        assert "photos[/old]" in out
        assert "x[bold]y" in out
        assert "[red]boom" in out

    def test_print_config(self, reporter):
        reporter.print_config({"Source Directory": "/data", "Digests": "MD5"})
        assert "/data" in self.output(reporter)

    def test_print_config_bracketed_path(self, reporter):
        reporter.print_config({"Source Directory": "/data/photos[/old]"})
        assert "photos[/old]" in self.output(reporter)

    def test_print_stats(self, reporter):
        stats = RunStats(
            processed=10,
            discovered=10,
            skipped=2,
            manifests={"MD5SUMS": Path("/sums/MD5SUMS")},
            elapsed_seconds=2.0,
        )
        reporter.print_stats(stats)

        out = self.output(reporter)
        assert "Files Checksummed" in out
        assert "/sums/MD5SUMS" in out
        assert "5.0 files/sec" in out

    def test_print_stats_unknown_total(self, reporter):
        reporter.print_stats(RunStats(processed=3))
        assert "unknown" in self.output(reporter)

    def test_quiet_mode_suppresses_info(self):
        reporter = RichProgressReporter(quiet=True, console=make_console())

        reporter.info("Suppressed")
        reporter.success("Suppressed")
        reporter.print_header("Suppressed")
        reporter.start_status()
        reporter.end_status("status: 1/1 (100.00%)")

        assert self.output(reporter) == ""
        assert reporter.last_status == "status: 1/1 (100.00%)"


class TestQuietProgressReporter:
    """Tests for the minimal reporter."""

    def test_tracks_status(self):
        reporter = QuietProgressReporter()
        reporter.start_status()
        reporter.update_status("a")
        reporter.end_status("b")

        assert reporter.last_status == "b"

    def test_errors_to_stderr(self, capsys):
        reporter = QuietProgressReporter()
        reporter.info("not shown")
        reporter.error("boom")

        err = capsys.readouterr().err
        assert "ERROR: boom" in err
        assert "not shown" not in err
