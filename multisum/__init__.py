"""Directory checksum manifests.

Walks a directory tree once, computes several digests per file in a single
pass and writes one ``<ALGO>SUMS`` manifest per algorithm.
"""

__version__ = "1.0.0"

# Core exports
from .core.config import ChecksumConfig, DigestAlgorithm, PrintMode, build_config
from .core.errors import ChecksumIOError, ConfigError, ForeignFileError, MultisumError
from .core.models import PipelineState, RunStats

# Service exports
from .services.pipeline import ChecksumPipeline, PipelineOptions
from .services.scanner import DirectoryScanner
from .services.progress import ProgressAggregator
from .services.repo_guard import RepoGuard
from .services.manifest import ManifestWriter

# Logging exports
from .logging.rich_logger import RichProgressReporter, QuietProgressReporter

__all__ = [
    # Core
    "ChecksumConfig",
    "DigestAlgorithm",
    "PrintMode",
    "build_config",
    "MultisumError",
    "ConfigError",
    "ForeignFileError",
    "ChecksumIOError",
    "PipelineState",
    "RunStats",
    # Services
    "ChecksumPipeline",
    "PipelineOptions",
    "DirectoryScanner",
    "ProgressAggregator",
    "RepoGuard",
    "ManifestWriter",
    # Logging
    "RichProgressReporter",
    "QuietProgressReporter",
]
