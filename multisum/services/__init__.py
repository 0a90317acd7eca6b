"""Service layer - scanning, progress, output guarding and manifests."""
from .manifest import ManifestWriter, format_manifest_line
from .pipeline import ChecksumPipeline, PipelineOptions
from .progress import ProgressAggregator, format_status
from .repo_guard import PROTECTED_FILE_NAME, RepoGuard, remove_tree_except
from .scanner import DirectoryScanner
from .walk import VCS_DIR_NAME, WalkEntry, walk_tree

__all__ = [
    # Walk
    "VCS_DIR_NAME",
    "WalkEntry",
    "walk_tree",
    # Scanner and progress
    "DirectoryScanner",
    "ProgressAggregator",
    "format_status",
    # Output directory
    "PROTECTED_FILE_NAME",
    "RepoGuard",
    "remove_tree_except",
    # Manifests
    "ManifestWriter",
    "format_manifest_line",
    # Pipeline
    "ChecksumPipeline",
    "PipelineOptions",
]
