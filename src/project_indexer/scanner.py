"""Directory walking and snapshot construction.

Keys are computed relative to the project root located above the scanned
directory, not relative to the scanned directory itself. Scanning "src/"
inside a project therefore yields "src/app.js", the same key a scan of the
whole project produces.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import errno
import logging
import os

from .context import ProjectContext
from .core import Snapshot
from .errors import IndexIOError
from .filters import PathFilter, default_path_filter
from .hashing import compute_file_digest

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise IndexIOError(error.filename or "<unknown>", error) from error


def scan_tree(
    root: Union[str, Path],
    path_filter: Optional[PathFilter] = None,
    strict_root: bool = False,
) -> Snapshot:
    """Fingerprint every admissible file under root.

    Args:
        root: Directory to scan (a single file is scanned on its own)
        path_filter: Admission rules (default: standard rules)
        strict_root: Fail if no project marker is found above root

    Returns:
        Snapshot keyed by project-relative POSIX path

    Raises:
        IndexIOError: If root is missing or any directory or file under it
            cannot be read. The scan is aborted; no partial snapshot is
            returned.
        ProjectRootNotFoundError: If strict_root and no project root exists
    """
    if path_filter is None:
        path_filter = default_path_filter()

    top = Path(root).resolve()
    if not top.exists():
        raise IndexIOError(root, FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(root)))

    ctx = ProjectContext.locate(top, strict=strict_root)
    snapshot = Snapshot()

    if top.is_file():
        _scan_file(top, ctx, path_filter, snapshot)
        return snapshot

    for dirpath, dirnames, filenames in os.walk(top, onerror=_raise_walk_error):
        current = Path(dirpath)

        # Prune in place; sorted for a reproducible walk order
        kept = []
        for name in sorted(dirnames):
            if path_filter.should_traverse(ctx.relative(current / name)):
                kept.append(name)
            else:
                logger.debug("Skipping directory %s", current / name)
        dirnames[:] = kept

        for name in sorted(filenames):
            _scan_file(current / name, ctx, path_filter, snapshot)

    logger.debug("Scanned %s: %d files", top, len(snapshot))
    return snapshot


def _scan_file(path: Path, ctx: ProjectContext, path_filter: PathFilter, snapshot: Snapshot) -> None:
    relpath = ctx.relative(path)
    rule = path_filter.rejecting_rule(relpath)
    if rule is not None:
        logger.debug("Skipping %s (%s)", relpath, rule.name)
        return
    if not path.is_file():
        # FIFOs, sockets and dangling links
        logger.debug("Skipping %s (not a regular file)", relpath)
        return
    snapshot.add(relpath, compute_file_digest(path))


def scan_paths(
    roots: Iterable[Union[str, Path]],
    path_filter: Optional[PathFilter] = None,
    strict_root: bool = False,
) -> Snapshot:
    """Scan several roots one after another and merge the results.

    Later roots win when two scans produce the same key.
    """
    merged = Snapshot()
    for root in roots:
        merged = merged.merge(scan_tree(root, path_filter, strict_root=strict_root))
    return merged
