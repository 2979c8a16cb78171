"""Gitignore-style pattern matching for project-indexer."""

from pathlib import Path
from typing import Iterable, List

from pathspec import PathSpec

from .constants import IGNORE_FILE
from .errors import ConfigError


def read_ignore_file(root: Path) -> List[str]:
    """Read patterns from the project's .project-indexerignore, if any.

    Blank lines and comment lines are skipped.

    Raises:
        ConfigError: If the file exists but cannot be read as UTF-8 text
    """
    ignore_file = root / IGNORE_FILE
    if not ignore_file.is_file():
        return []
    try:
        text = ignore_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {ignore_file}: {e}") from e

    patterns = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


class IgnoreSpec:
    """Compiled set of gitignore-style exclusion patterns."""

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = list(patterns)
        self.spec = PathSpec.from_lines("gitwildmatch", self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a project-relative POSIX path matches any pattern."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a directory should be descended into during a scan.

        Args:
            dirpath: Project-relative directory path in POSIX format
        """
        # Add trailing slash to match directory patterns
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"
        return not self.spec.match_file(dirpath)
