"""Core operations for project-indexer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
import logging

from .config import load_indexer_config, snapshot_target
from .context import find_project_root
from .core import ChangeSet, Snapshot
from .diffing import compute_diff
from .errors import ProjectRootNotFoundError
from .filters import PathFilter, default_path_filter
from .ignore import read_ignore_file
from .scanner import scan_paths
from .store import load_snapshot, save_snapshot

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class IndexResult:
    """Outcome of an index operation."""
    snapshot: Snapshot
    target: Path


@dataclass
class CheckResult:
    """Outcome of a check operation."""
    changes: ChangeSet
    current: Snapshot
    prior: Snapshot
    target: Path


@dataclass
class _Settings:
    target: Path
    path_filter: PathFilter
    strict_root: bool


def _settings_root(paths: Sequence[PathLike]) -> Path:
    """Directory holding the config and ignore files.

    This is the project root above the first scan path, or the scan path
    itself (its directory, for a file) when no project marker exists.
    """
    start = Path(paths[0]).resolve() if paths else Path.cwd()
    try:
        return find_project_root(start, strict=True)
    except ProjectRootNotFoundError:
        return start if start.is_dir() else start.parent


def _resolve_settings(
    paths: Sequence[PathLike],
    filename: Optional[str],
    ignore: Iterable[str],
    strict_root: Optional[bool],
) -> _Settings:
    """Merge config file, environment and argument settings."""
    root = _settings_root(paths)
    config = load_indexer_config(root)
    target = snapshot_target(config, root, filename)

    patterns: List[str] = read_ignore_file(root) + config.ignore + list(ignore)
    path_filter = default_path_filter(snapshot_name=target.name, ignore_patterns=patterns)
    logger.debug("Snapshot file: %s, rules: %s", target, path_filter.rule_names())
    return _Settings(
        target=target,
        path_filter=path_filter,
        strict_root=config.strict_root if strict_root is None else strict_root,
    )


def index_paths(
    paths: Sequence[PathLike],
    filename: Optional[str] = None,
    ignore: Iterable[str] = (),
    strict_root: Optional[bool] = None,
) -> IndexResult:
    """Scan paths, merge the results and write the snapshot.

    Raises:
        IndexIOError: If any path cannot be scanned (nothing is written)
            or the snapshot cannot be written
        ConfigError: If the configuration file is invalid
    """
    settings = _resolve_settings(paths, filename, ignore, strict_root)
    snapshot = scan_paths(paths, settings.path_filter, strict_root=settings.strict_root)
    save_snapshot(snapshot, settings.target)
    return IndexResult(snapshot=snapshot, target=settings.target)


def check_paths(
    paths: Sequence[PathLike],
    filename: Optional[str] = None,
    ignore: Iterable[str] = (),
    strict_root: Optional[bool] = None,
) -> CheckResult:
    """Rescan paths and compare against the stored snapshot.

    The stored snapshot is loaded before scanning, so a missing snapshot
    fails fast. Nothing is written.

    Raises:
        NotFoundError: If the snapshot file does not exist
        FormatError: If the snapshot file cannot be parsed
        IndexIOError: If any path cannot be scanned
    """
    settings = _resolve_settings(paths, filename, ignore, strict_root)
    prior = load_snapshot(settings.target)
    current = scan_paths(paths, settings.path_filter, strict_root=settings.strict_root)
    changes = compute_diff(current, prior)
    logger.debug("Check against %s: %s", settings.target, changes.summary())
    return CheckResult(changes=changes, current=current, prior=prior, target=settings.target)
