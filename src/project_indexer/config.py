"""Indexer configuration helpers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional
import os

import yaml

from .constants import CONFIG_FILE, FILENAME_ENV_VAR
from .errors import ConfigError
from .store import resolve_snapshot_path


@dataclass
class IndexerConfig:
    """Settings read from .project-indexer.yaml."""

    filename: Optional[str] = None  # relative to the config file's directory
    ignore: List[str] = field(default_factory=list)
    strict_root: bool = False


def load_indexer_config(root: Path) -> IndexerConfig:
    """Load configuration from <root>/.project-indexer.yaml if present.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or has
            wrong value types
    """
    cfg_path = root / CONFIG_FILE
    if not cfg_path.exists():
        return IndexerConfig()

    try:
        text = cfg_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {cfg_path}: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping")

    filename = data.get("filename")
    if filename is not None and (not isinstance(filename, str) or not filename):
        raise ConfigError(f"{cfg_path}: 'filename' must be a non-empty string")

    ignore = data.get("ignore", [])
    if isinstance(ignore, str):
        ignore = [ignore]
    if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
        raise ConfigError(f"{cfg_path}: 'ignore' must be a list of patterns")

    strict_root = data.get("strict_root", False)
    if not isinstance(strict_root, bool):
        raise ConfigError(f"{cfg_path}: 'strict_root' must be true or false")

    return IndexerConfig(filename=filename, ignore=ignore, strict_root=strict_root)


def snapshot_target(
    config: IndexerConfig,
    root: Path,
    filename: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Pick the snapshot location.

    Precedence: explicit filename > PROJECT_INDEXER_FILENAME > config file >
    default. Explicit and environment values are relative to the current
    directory; a config file value is relative to the project root.
    """
    environ = os.environ if environ is None else environ
    if filename:
        return resolve_snapshot_path(filename)
    if environ.get(FILENAME_ENV_VAR):
        return resolve_snapshot_path(environ[FILENAME_ENV_VAR])
    if config.filename:
        return root / resolve_snapshot_path(config.filename)
    return resolve_snapshot_path(None)
