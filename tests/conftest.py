"""Shared test fixtures and utilities."""

from pathlib import Path
from typing import Union

import pytest

from project_indexer.constants import FILENAME_ENV_VAR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's PROJECT_INDEXER_FILENAME out of the tests."""
    monkeypatch.delenv(FILENAME_ENV_VAR, raising=False)


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Create a project root (marked by .git) and chdir into it."""
    root = tmp_path / "proj"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def write_file(project):
    """Factory fixture to write files relative to the project root."""
    def _write(path: str, content: Union[str, bytes] = "test content") -> Path:
        file_path = project / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def sample_tree(write_file):
    """A small web project with tracked and untracked files."""
    files = {
        "src/app.js": "console.log('app');\n",
        "src/components/Button.tsx": "export const Button = () => null;\n",
        "src/components/Button.test.tsx": "test('button', () => {});\n",
        "src/styles/main.scss": "body { margin: 0; }\n",
        "public/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
        "package.json": '{"name": "demo"}\n',
        "README.md": "# demo\n",
    }
    for path, content in files.items():
        write_file(path, content)
    return files
