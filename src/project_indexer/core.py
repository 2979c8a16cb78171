"""Core data models for project-indexer.

Snapshot and ChangeSet are created fresh for every scan or comparison;
neither carries state between invocations.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


# ============= Snapshot =============

class Snapshot(BaseModel):
    """Mapping of project-relative POSIX path to content fingerprint.

    Keys use forward slashes and never start with "./" or "/". Values are
    lowercase hex digests of the file contents.
    """

    files: Dict[str, str] = Field(default_factory=dict)

    def add(self, path: str, fingerprint: str) -> None:
        """Record a file's fingerprint, replacing any previous entry."""
        self.files[path] = fingerprint

    def merge(self, other: "Snapshot") -> "Snapshot":
        """Return a new snapshot with entries from other winning on duplicates."""
        merged = dict(self.files)
        merged.update(other.files)
        return Snapshot(files=merged)

    def paths(self) -> List[str]:
        """Sorted list of paths in the snapshot."""
        return sorted(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, path: object) -> bool:
        return path in self.files


# ============= Change Detection =============

class ChangeSet(BaseModel):
    """Result of comparing a current snapshot against a prior one.

    The three lists are disjoint and sorted. Paths present in both snapshots
    with the same fingerprint are unchanged and appear in none of them.
    """

    added: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """Check if any path was added, modified or removed."""
        return bool(self.added or self.modified or self.removed)

    @property
    def is_empty(self) -> bool:
        return not self.has_changes

    @property
    def total(self) -> int:
        return len(self.added) + len(self.modified) + len(self.removed)

    def summary(self) -> str:
        """Get human-readable summary."""
        if self.is_empty:
            return "No changes"
        parts = []
        if self.added:
            parts.append(f"{len(self.added)} added")
        if self.modified:
            parts.append(f"{len(self.modified)} modified")
        if self.removed:
            parts.append(f"{len(self.removed)} removed")
        return ", ".join(parts)
