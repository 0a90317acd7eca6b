"""Command line entry point: multisum [OPTIONS] --target DIR SOURCE."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .core.config import ChecksumConfig, DigestAlgorithm, PrintMode, build_config
from .core.errors import ConfigError, MultisumError
from .logging.rich_logger import QuietProgressReporter, RichProgressReporter
from .services.pipeline import ChecksumPipeline


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="multisum",
        description="Write one checksum manifest per digest algorithm for a directory tree.",
    )

    parser.add_argument(
        "source",
        type=Path,
        help="Directory of files to checksum",
    )
    parser.add_argument(
        "-t", "--target",
        type=Path,
        required=True,
        help="Directory to store the checksum files in (emptied before writing)",
    )

    # Modes
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print checksums in text mode ( )",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Print checksums in binary mode (*), the default",
    )

    # Digests, in the order manifests are created
    for algorithm in DigestAlgorithm:
        parser.add_argument(
            f"--{algorithm.value}",
            dest="algorithms",
            action="append_const",
            const=algorithm,
            help=f"Calculate {algorithm.name} sums",
        )

    # Output options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ChecksumConfig:
    """Turn parsed flags into a validated configuration.

    Raises:
        ConfigError: Contradictory or missing options, bad directories.
    """
    if args.text and args.binary:
        raise ConfigError("--binary and --text are mutually exclusive")
    if not args.algorithms:
        raise ConfigError("must use at least one hash flag")

    mode = PrintMode.TEXT if args.text else PrintMode.BINARY
    # Repeated flags collapse to their first position
    algorithms = tuple(dict.fromkeys(args.algorithms))

    return build_config(
        print_mode=mode,
        algorithms=algorithms,
        source_dir=args.source,
        target_dir=args.target,
    )


def setup_logging(reporter: RichProgressReporter | QuietProgressReporter, verbose: bool, quiet: bool) -> None:
    """Route ``logging`` records through Rich on the reporter's console."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    console = getattr(reporter, "console", None)
    if console is None:
        console = Console(stderr=True)
    handler = RichHandler(console=console, show_time=False, show_path=verbose, markup=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        reporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter()
    setup_logging(reporter, args.verbose, args.quiet)

    try:
        config = config_from_args(args)

        reporter.print_header("multisum")
        reporter.info(config.describe())
        reporter.print_config({
            "Source Directory": str(config.source_dir),
            "Target Directory": str(config.target_dir),
            "Mode": config.print_mode.value,
            "Digests": ", ".join(a.name for a in config.algorithms),
        })

        pipeline = ChecksumPipeline(config, reporter=reporter)
        stats = pipeline.run()
        reporter.print_stats(stats)
        reporter.success(f"Wrote {len(stats.manifests)} manifests to {config.target_dir}")
        return 0

    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - no stack trace
        return 130
    except MultisumError as e:
        reporter.error(f"failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
