"""Custom exceptions for project-indexer.

This module defines typed exceptions so callers can tell an unreadable
tree apart from a missing or corrupt snapshot.
"""

from pathlib import Path
from typing import Optional, Union


class IndexerError(RuntimeError):
    """Base class for all project-indexer errors."""
    pass


class IndexIOError(IndexerError):
    """A file or directory could not be read, or a snapshot could not be written."""

    def __init__(self, path: Union[str, Path], reason: Optional[BaseException] = None):
        self.path = str(path)
        self.reason = reason
        message = f"I/O error on {self.path}"
        if isinstance(reason, OSError) and reason.strerror:
            message += f": {reason.strerror}"
        elif reason is not None:
            message += f": {reason}"
        super().__init__(message)


class NotFoundError(IndexerError):
    """Snapshot file does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(
            f"Snapshot not found at {self.path}. "
            f"Run 'project-indexer index' first."
        )


class FormatError(IndexerError):
    """Snapshot contents are not a mapping of path to fingerprint."""

    def __init__(self, path: Union[str, Path], detail: str):
        self.path = str(path)
        self.detail = detail
        super().__init__(f"Could not decode snapshot {self.path}: {detail}")


class ProjectRootNotFoundError(IndexerError):
    """No project marker directory found above the start directory (strict mode)."""

    def __init__(self, start: Union[str, Path], markers):
        self.start = str(start)
        self.markers = tuple(markers)
        super().__init__(
            f"No project root found above {self.start} "
            f"(looked for {', '.join(self.markers)})"
        )


class ConfigError(IndexerError):
    """Configuration file is invalid."""
    pass
