"""Core domain models, configuration and protocols."""
from .config import ChecksumConfig, DigestAlgorithm, PrintMode, build_config
from .errors import ChecksumIOError, ConfigError, ForeignFileError, MultisumError
from .models import AtomicCounter, PipelineState, ProgressSnapshot, RunStats
from .protocols import DigestSink, ProgressReporter, TotalCountSource

__all__ = [
    # Config
    "ChecksumConfig",
    "DigestAlgorithm",
    "PrintMode",
    "build_config",
    # Errors
    "MultisumError",
    "ConfigError",
    "ForeignFileError",
    "ChecksumIOError",
    # Models
    "AtomicCounter",
    "PipelineState",
    "ProgressSnapshot",
    "RunStats",
    # Protocols
    "DigestSink",
    "ProgressReporter",
    "TotalCountSource",
]
