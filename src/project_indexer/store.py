"""Snapshot persistence.

A snapshot file is a UTF-8 JSON object mapping project-relative path to
fingerprint, written with sorted keys so unchanged trees produce
byte-identical files.
"""

from pathlib import Path
from typing import Optional, Union
import json
import logging
import os
import stat
import tempfile

from .constants import DEFAULT_SNAPSHOT_NAME, SNAPSHOT_SUFFIX
from .core import Snapshot
from .errors import FormatError, IndexIOError, NotFoundError

logger = logging.getLogger(__name__)


def resolve_snapshot_path(filename: Optional[Union[str, Path]] = None) -> Path:
    """Resolve a --filename value to the snapshot file location.

    A value ending in ".idx" names the snapshot file itself. Any other value
    names a directory that holds the default ".project-indexer.idx".
    """
    if filename is None or str(filename) == "":
        return Path(DEFAULT_SNAPSHOT_NAME)
    path = Path(filename)
    if path.name.endswith(SNAPSHOT_SUFFIX):
        return path
    return path / DEFAULT_SNAPSHOT_NAME


# ============= Atomic Write Helpers =============

def _target_mode(path: Path) -> int:
    """Permission bits for a replacement file: the existing file's, else 0666 & ~umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write_text(path: Path, text: str) -> None:
    """Atomically write text to file with crash safety.

    1. Write to a temp file in the target directory and fsync it
    2. Rename over the target (readers see old or new, never partial)
    3. Fsync the parent directory so the rename is durable

    The replaced file keeps its permission bits; a new file gets the
    umask-derived mode a plain open() would give it.

    The temp file is removed if any step fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        delete=False,
        dir=path.parent,
        prefix=f".{path.name}.tmp-",
        suffix=""
    ) as f:
        tmp = Path(f.name)
        try:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        except BaseException:
            f.close()
            tmp.unlink(missing_ok=True)
            raise

    try:
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    # Directory fsync is best-effort (unsupported on Windows)
    try:
        flags = os.O_RDONLY
        if hasattr(os, "O_DIRECTORY"):
            flags |= os.O_DIRECTORY
        dirfd = os.open(str(path.parent), flags)
        try:
            os.fsync(dirfd)
        finally:
            os.close(dirfd)
    except OSError:
        logger.debug("Directory fsync not supported for %s", path.parent)


# ============= Snapshot I/O =============

def dumps_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to its on-disk JSON text."""
    return json.dumps(snapshot.files, indent=2, sort_keys=True) + "\n"


def loads_snapshot(text: str, source: Union[str, Path] = "<string>") -> Snapshot:
    """Parse snapshot JSON text.

    Raises:
        FormatError: If the text is not a JSON object of string to string
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(source, f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, dict):
        raise FormatError(source, f"expected a JSON object, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(value, str):
            raise FormatError(source, f"fingerprint for {key!r} is not a string")
    return Snapshot(files=data)


def save_snapshot(snapshot: Snapshot, target: Union[str, Path]) -> Path:
    """Write a snapshot atomically, creating or replacing target.

    Returns:
        Path the snapshot was written to

    Raises:
        IndexIOError: If the snapshot could not be written. An existing
            snapshot at target is left untouched.
    """
    path = Path(target)
    try:
        _atomic_write_text(path, dumps_snapshot(snapshot))
    except OSError as e:
        raise IndexIOError(path, e) from e
    logger.debug("Wrote %d entries to %s", len(snapshot), path)
    return path


def load_snapshot(source: Union[str, Path]) -> Snapshot:
    """Read a snapshot file.

    Raises:
        NotFoundError: If source does not exist
        FormatError: If the contents are not a snapshot mapping
        IndexIOError: If source exists but cannot be read
    """
    path = Path(source)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise NotFoundError(path) from e
    except OSError as e:
        raise IndexIOError(path, e) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(path, "not valid UTF-8") from e
    return loads_snapshot(text, path)
