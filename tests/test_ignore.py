"""Tests for ignore pattern system."""

from pathlib import Path

import pytest

from project_indexer.constants import IGNORE_FILE
from project_indexer.errors import ConfigError
from project_indexer.ignore import IgnoreSpec, read_ignore_file


class TestIgnoreSpec:
    """Test ignore pattern matching."""

    def test_patterns(self):
        ignore = IgnoreSpec(["*.log", "dist/", "!dist/keep.js"])
        assert ignore.is_ignored("debug.log")
        assert ignore.is_ignored("dist/app.js")
        assert not ignore.is_ignored("dist/keep.js")
        assert not ignore.is_ignored("src/app.js")

    def test_empty_spec_is_falsy(self):
        assert not IgnoreSpec()
        assert IgnoreSpec(["*.log"])
        assert not IgnoreSpec().is_ignored("anything.js")

    def test_should_traverse(self):
        ignore = IgnoreSpec(["node_modules/", "build"])
        assert not ignore.should_traverse("node_modules")
        assert not ignore.should_traverse("packages/a/node_modules")
        assert not ignore.should_traverse("build")
        assert ignore.should_traverse("src")

    def test_posix_paths_from_pathlib(self):
        """Paths built with pathlib match once converted to POSIX form."""
        ignore = IgnoreSpec(["dist/"])
        assert ignore.is_ignored(Path("dist").joinpath("app.js").as_posix())
        assert not ignore.is_ignored(Path("src").joinpath("main.js").as_posix())


class TestIgnoreFile:

    def test_reads_project_ignore_file(self, tmp_path):
        (tmp_path / IGNORE_FILE).write_text("""
# Comments should be ignored
*.log

coverage/
""")
        assert read_ignore_file(tmp_path) == ["*.log", "coverage/"]

    def test_missing_ignore_file(self, tmp_path):
        assert read_ignore_file(tmp_path) == []

    def test_undecodable_ignore_file(self, tmp_path):
        (tmp_path / IGNORE_FILE).write_bytes(b"\xff\xfe bad\n")
        with pytest.raises(ConfigError) as exc_info:
            read_ignore_file(tmp_path)
        assert IGNORE_FILE in str(exc_info.value)
