"""Admission rules deciding which files get fingerprinted.

A PathFilter is an ordered list of rules evaluated against project-relative
POSIX paths. An EXCLUDE rule rejects a path its predicate matches; a REQUIRE
rule rejects a path its predicate does not match. The first rejecting rule
wins. Directories are never evaluated, only the files inside them.

Extension matching is case-sensitive: "App.JS" is not a JavaScript file.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence
import posixpath
import re

from .constants import DEFAULT_SNAPSHOT_NAME, SNAPSHOT_SUFFIX, VCS_DIRS
from .ignore import IgnoreSpec


ALLOWED_EXTENSIONS = (
    # Source and markup
    "php", "ts", "js", "tsx", "jsx", "mjs", "cjs", "mts", "json", "gql",
    # Styling
    "css", "sass", "scss",
    # Assets
    "png", "svg", "jpg",
)

TEST_FILE_EXTENSIONS = ("tsx", "ts", "js", "jsx", "json")

TEST_FILE_PATTERN = re.compile(r"\.test\.(" + "|".join(TEST_FILE_EXTENSIONS) + r")$")
ALLOWED_FILE_PATTERN = re.compile(r".+\.(" + "|".join(ALLOWED_EXTENSIONS) + r")$")


class RuleKind(str, Enum):
    """How a rule's predicate result maps to rejection."""

    EXCLUDE = "exclude"
    REQUIRE = "require"


@dataclass(frozen=True)
class FilterRule:
    """A named admission rule."""

    name: str
    kind: RuleKind
    predicate: Callable[[str], bool]
    # Directory predicate; a matching directory is not descended into
    prune: Optional[Callable[[str], bool]] = None

    def rejects(self, relpath: str) -> bool:
        matched = bool(self.predicate(relpath))
        if self.kind is RuleKind.EXCLUDE:
            return matched
        return not matched


class PathFilter:
    """Ordered admission rules for project-relative paths."""

    def __init__(self, rules: Sequence[FilterRule]):
        self.rules: List[FilterRule] = list(rules)

    def rejecting_rule(self, relpath: str) -> Optional[FilterRule]:
        """Return the first rule that rejects the path, or None if admitted."""
        for rule in self.rules:
            if rule.rejects(relpath):
                return rule
        return None

    def admits(self, relpath: str) -> bool:
        return self.rejecting_rule(relpath) is None

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a project-relative directory can hold admissible files."""
        return not any(rule.prune(dirpath) for rule in self.rules if rule.prune)

    def __call__(self, relpath: str) -> bool:
        return self.admits(relpath)

    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.rules]


# ============= Predicates =============

def _basename(relpath: str) -> str:
    return posixpath.basename(relpath)


def is_snapshot_file(relpath: str, snapshot_name: str = DEFAULT_SNAPSHOT_NAME) -> bool:
    """True for the snapshot file itself or anything with the reserved suffix."""
    name = _basename(relpath)
    if name in (DEFAULT_SNAPSHOT_NAME, _basename(snapshot_name)):
        return True
    return relpath.endswith(SNAPSHOT_SUFFIX)


def in_vcs_metadata(relpath: str, vcs_dirs: Iterable[str] = VCS_DIRS) -> bool:
    """True if any segment of the path is a version-control metadata directory."""
    segments = relpath.split("/")
    return any(segment in vcs_dirs for segment in segments)


def is_test_file(relpath: str) -> bool:
    return TEST_FILE_PATTERN.search(_basename(relpath)) is not None


def has_allowed_extension(relpath: str) -> bool:
    return ALLOWED_FILE_PATTERN.search(_basename(relpath)) is not None


# ============= Rule sets =============

def default_rules(
    snapshot_name: str = DEFAULT_SNAPSHOT_NAME,
    ignore: Optional[IgnoreSpec] = None,
) -> List[FilterRule]:
    """Build the standard rule list.

    Args:
        snapshot_name: Name (or path) of the snapshot file being written/read
        ignore: Extra gitignore-style exclusions, applied before the
            extension allow-list
    """
    rules = [
        FilterRule("snapshot-file", RuleKind.EXCLUDE,
                   lambda p: is_snapshot_file(p, snapshot_name)),
        FilterRule("vcs-metadata", RuleKind.EXCLUDE, in_vcs_metadata,
                   prune=in_vcs_metadata),
        FilterRule("test-file", RuleKind.EXCLUDE, is_test_file),
    ]
    if ignore:
        rules.append(FilterRule(
            "ignore-patterns", RuleKind.EXCLUDE, ignore.is_ignored,
            prune=lambda d: not ignore.should_traverse(d),
        ))
    rules.append(FilterRule("allowed-extension", RuleKind.REQUIRE, has_allowed_extension))
    return rules


def default_path_filter(
    snapshot_name: str = DEFAULT_SNAPSHOT_NAME,
    ignore_patterns: Iterable[str] = (),
) -> PathFilter:
    """PathFilter with the standard rules and optional ignore patterns."""
    patterns = list(ignore_patterns)
    ignore = IgnoreSpec(patterns) if patterns else None
    return PathFilter(default_rules(snapshot_name, ignore))
