"""Content fingerprints for change detection.

Fingerprints are SHA-1 hex digests of raw file bytes. SHA-1 is chosen for
speed: the fingerprint only has to notice that content changed, it is not
a security control.
"""

from pathlib import Path
from typing import Union
import hashlib

from .errors import IndexIOError

CHUNK_SIZE = 8192

# Length of a hex fingerprint
DIGEST_LENGTH = hashlib.sha1().digest_size * 2


def compute_file_digest(path: Union[str, Path]) -> str:
    """Compute the SHA-1 fingerprint of a file's contents.

    The file is streamed in fixed-size chunks and closed before returning,
    even when a read fails part way through.

    Args:
        path: Path to file to hash

    Returns:
        40-character lowercase hex digest

    Raises:
        IndexIOError: If the file cannot be opened or read
    """
    sha1 = hashlib.sha1()
    try:
        with Path(path).open("rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                sha1.update(chunk)
    except OSError as e:
        raise IndexIOError(path, e) from e
    return sha1.hexdigest()


def compute_bytes_digest(data: bytes) -> str:
    """Fingerprint of in-memory bytes, identical to hashing a file holding them."""
    return hashlib.sha1(data).hexdigest()


__all__ = [
    "CHUNK_SIZE",
    "DIGEST_LENGTH",
    "compute_file_digest",
    "compute_bytes_digest",
]
