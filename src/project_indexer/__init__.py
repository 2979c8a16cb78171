"""Content-hash change detection for project trees."""

from .constants import INDEXER_VERSION
from .core import ChangeSet, Snapshot
from .diffing import compute_diff
from .errors import (
    ConfigError,
    FormatError,
    IndexerError,
    IndexIOError,
    NotFoundError,
    ProjectRootNotFoundError,
)
from .filters import PathFilter, default_path_filter
from .hashing import compute_file_digest
from .scanner import scan_paths, scan_tree
from .store import load_snapshot, save_snapshot

__version__ = INDEXER_VERSION

__all__ = [
    "ChangeSet",
    "Snapshot",
    "PathFilter",
    "default_path_filter",
    "compute_diff",
    "compute_file_digest",
    "scan_tree",
    "scan_paths",
    "load_snapshot",
    "save_snapshot",
    "IndexerError",
    "IndexIOError",
    "NotFoundError",
    "FormatError",
    "ProjectRootNotFoundError",
    "ConfigError",
]
