"""Tests for project root discovery."""

import pytest

from project_indexer.context import ProjectContext, find_project_root
from project_indexer.errors import IndexerError, ProjectRootNotFoundError

# A marker name no real directory above tmp_path will have
NO_SUCH_MARKER = (".project-indexer-test-marker-that-does-not-exist",)


class TestFindProjectRoot:
    """Test the upward marker search."""

    def test_start_directory_is_root(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert find_project_root(tmp_path) == tmp_path.resolve()

    def test_walks_up_to_git(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "src" / "components"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path.resolve()

    def test_node_modules_marker(self, tmp_path):
        (tmp_path / "node_modules").mkdir()
        nested = tmp_path / "src"
        nested.mkdir()
        assert find_project_root(nested) == tmp_path.resolve()

    def test_nearest_marker_wins(self, tmp_path):
        (tmp_path / ".git").mkdir()
        package = tmp_path / "packages" / "web"
        (package / "node_modules").mkdir(parents=True)
        assert find_project_root(package / "node_modules") == package.resolve()
        assert find_project_root(package) == package.resolve()

    def test_file_start(self, tmp_path):
        (tmp_path / ".git").mkdir()
        f = tmp_path / "src" / "app.js"
        f.parent.mkdir()
        f.write_text("x")
        assert find_project_root(f) == tmp_path.resolve()

    def test_fallback_is_parent_of_start(self, tmp_path):
        """Without any marker, the parent of the start directory is used."""
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        assert find_project_root(start, markers=NO_SUCH_MARKER) == (tmp_path / "a").resolve()

    def test_relative_start(self, project):
        (project / "src").mkdir()
        assert find_project_root("src") == project.resolve()

    def test_strict_mode_raises(self, tmp_path):
        start = tmp_path / "a"
        start.mkdir()
        with pytest.raises(ProjectRootNotFoundError) as exc_info:
            find_project_root(start, markers=NO_SUCH_MARKER, strict=True)
        assert exc_info.value.markers == NO_SUCH_MARKER

    def test_strict_mode_finds_marker(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert find_project_root(tmp_path, strict=True) == tmp_path.resolve()


class TestProjectContext:

    def test_locate(self, project):
        (project / "src").mkdir()
        ctx = ProjectContext.locate(project / "src")
        assert ctx.root == project.resolve()

    def test_locate_defaults_to_cwd(self, project):
        assert ProjectContext.locate().root == project.resolve()

    def test_relative_is_posix(self, project):
        ctx = ProjectContext(project)
        assert ctx.relative(project.resolve() / "src" / "app.js") == "src/app.js"

    def test_relative_from_cwd(self, project):
        ctx = ProjectContext(project)
        assert ctx.relative("src/app.js") == "src/app.js"

    def test_relative_outside_project(self, project, tmp_path):
        ctx = ProjectContext(project)
        with pytest.raises(IndexerError):
            ctx.relative(tmp_path / "elsewhere.js")

    def test_absolute(self, project):
        ctx = ProjectContext(project)
        assert ctx.absolute("src/app.js") == project.resolve() / "src" / "app.js"
