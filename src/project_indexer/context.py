"""Project root discovery and project-relative path resolution."""

from pathlib import Path
from typing import Iterable, Optional, Union
import logging

from .constants import ROOT_MARKERS
from .errors import IndexerError, ProjectRootNotFoundError

logger = logging.getLogger(__name__)


def _has_marker(directory: Path, markers: Iterable[str]) -> bool:
    return any((directory / marker).exists() for marker in markers)


def find_project_root(
    start: Union[str, Path],
    markers: Iterable[str] = ROOT_MARKERS,
    strict: bool = False,
) -> Path:
    """Walk up from start to the nearest directory holding a project marker.

    The start directory itself is checked first. When the filesystem root is
    reached without a match, the parent of the start directory is returned
    so relative paths stay usable outside a real project.

    Args:
        start: Directory (or file) to start searching from
        markers: Marker subdirectory names, e.g. ".git" and "node_modules"
        strict: Raise instead of falling back when no marker is found

    Returns:
        Absolute path of the project root

    Raises:
        ProjectRootNotFoundError: If strict and no marker was found
    """
    markers = tuple(markers)
    original = Path(start).resolve()
    current = original

    while True:
        if _has_marker(current, markers):
            logger.debug("Project root for %s: %s", original, current)
            return current
        if current == current.parent:
            break
        current = current.parent

    if strict:
        raise ProjectRootNotFoundError(original, markers)

    fallback = original.parent
    logger.debug("No project marker above %s, falling back to %s", original, fallback)
    return fallback


class ProjectContext:
    """A located project root with path conversion helpers."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    @classmethod
    def locate(
        cls,
        start: Optional[Union[str, Path]] = None,
        strict: bool = False,
        markers: Iterable[str] = ROOT_MARKERS,
    ) -> "ProjectContext":
        """Find the project root above start (default: current directory)."""
        return cls(find_project_root(start or Path.cwd(), markers=markers, strict=strict))

    def relative(self, path: Union[str, Path]) -> str:
        """Convert an absolute path under the root to a project-relative POSIX path.

        Raises:
            IndexerError: If the path is outside the project root
        """
        p = Path(path)
        if not p.is_absolute():
            p = (Path.cwd() / p).resolve()
        try:
            return p.relative_to(self.root).as_posix()
        except ValueError:
            raise IndexerError(f"Path {p} is outside project root {self.root}")

    def absolute(self, project_path: Union[str, Path]) -> Path:
        """Get absolute path from project-relative path."""
        return self.root / project_path
