"""Diff computation logic - stable module for computing differences."""

from .core import ChangeSet, Snapshot


def compute_diff(current: Snapshot, prior: Snapshot) -> ChangeSet:
    """
    Classify every path of two snapshots as added, modified or removed.

    Args:
        current: Snapshot of the tree as it is now.
        prior: Previously stored snapshot.

    Returns:
        ChangeSet with each list sorted by path. Paths with identical
        fingerprints in both snapshots are unchanged and omitted.

    Note:
        Fingerprints never encode the path, so a rename shows up as the old
        path removed and the new path added, not as a modification.
    """
    added = []
    modified = []
    removed = []

    for path, fingerprint in current.files.items():
        prior_fingerprint = prior.files.get(path)
        if prior_fingerprint is None:
            added.append(path)
        elif prior_fingerprint != fingerprint:
            modified.append(path)

    for path in prior.files:
        if path not in current.files:
            removed.append(path)

    return ChangeSet(
        added=sorted(added),
        modified=sorted(modified),
        removed=sorted(removed),
    )
