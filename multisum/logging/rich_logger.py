"""Rich-based progress reporter implementation."""
from __future__ import annotations

import sys
import threading
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.models import RunStats


class RichProgressReporter:
    """Progress reporter using Rich for terminal output.

    Implements the ProgressReporter protocol. The status line is redrawn in
    place through a :class:`rich.live.Live` display; refreshes are driven by
    the caller, not by a Rich timer.
    """

    def __init__(
        self,
        quiet: bool = False,
        console: Optional[Console] = None,
    ):
        """Initialize the reporter.

        Args:
            quiet: Suppress all non-essential output.
            console: Console to draw on (defaults to stderr).
        """
        self._console = console or Console(stderr=True)
        self._quiet = quiet
        self._live: Optional[Live] = None
        self._last_status = ""
        self._lock = threading.Lock()

    @property
    def console(self) -> Console:
        return self._console

    @property
    def last_status(self) -> str:
        return self._last_status

    # --- Status line ---

    def start_status(self) -> None:
        """Begin the in-place status display."""
        with self._lock:
            if self._quiet or self._live is not None:
                return
            self._live = Live(
                Text(""),
                console=self._console,
                auto_refresh=False,
                transient=True,
            )
            self._live.start()

    def update_status(self, line: str) -> None:
        """Replace the status line."""
        with self._lock:
            self._last_status = line
            if self._live is not None:
                self._live.update(Text(line, style="bold blue"), refresh=True)

    def end_status(self, final_line: Optional[str] = None) -> None:
        """Stop the live display and print ``final_line`` once."""
        with self._lock:
            if self._live is not None:
                self._live.stop()
                self._live = None
            if final_line is not None:
                self._last_status = final_line
                if not self._quiet:
                    self._console.print(Text(final_line, style="bold blue"))

    # --- Logging Methods ---

    def info(self, message: str) -> None:
        """Log an info message."""
        if not self._quiet:
            self._console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Log a success message."""
        if not self._quiet:
            self._console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self._console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Log an error message."""
        self._console.print(f"[red]✗[/red] {escape(message)}", style="red")

    # --- Specialized Output ---

    def print_header(self, title: str) -> None:
        """Print a styled header."""
        if self._quiet:
            return

        text = Text(title, style="bold cyan")
        self._console.print(Panel(text, border_style="cyan"))

    def print_config(self, config_items: dict) -> None:
        """Print configuration as a table."""
        if self._quiet:
            return

        table = Table(title="Configuration", show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in config_items.items():
            table.add_row(key, Text(str(value)))

        self._console.print(table)

    def print_stats(self, stats: RunStats) -> None:
        """Print run statistics."""
        if self._quiet:
            return

        table = Table(title="Checksums Complete", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")

        table.add_row("Files Checksummed", str(stats.processed))
        table.add_row(
            "Files Discovered",
            str(stats.discovered) if stats.discovered is not None else "unknown",
        )
        if stats.skipped > 0:
            table.add_row("Skipped", str(stats.skipped))
        for name, path in stats.manifests.items():
            table.add_row(name, Text(str(path)))

        if stats.elapsed_seconds > 0:
            rate = stats.processed / stats.elapsed_seconds
            table.add_row("", "")  # Blank row
            table.add_row("Time Elapsed", f"{stats.elapsed_seconds:.1f}s")
            table.add_row("Processing Rate", f"{rate:.1f} files/sec")

        self._console.print(table)


class QuietProgressReporter:
    """Minimal progress reporter that only shows errors."""

    def __init__(self) -> None:
        self.last_status = ""

    def start_status(self) -> None:
        pass

    def update_status(self, line: str) -> None:
        self.last_status = line

    def end_status(self, final_line: Optional[str] = None) -> None:
        if final_line is not None:
            self.last_status = final_line

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)

    def print_header(self, title: str) -> None:
        pass

    def print_config(self, config_items: dict) -> None:
        pass

    def print_stats(self, stats: RunStats) -> None:
        pass
