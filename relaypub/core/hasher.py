"""SHA-256 helpers for artifact checksums."""

from __future__ import annotations

import hashlib
from pathlib import Path

from relaypub.core.errors import ReleaseIOError

_CHUNK_SIZE = 1 << 20


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Path | str) -> str:
    """Stream a file through SHA-256 and return the lowercase hex digest.

    Raises ReleaseIOError if the file cannot be read.
    """
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise ReleaseIOError(f"cannot checksum {path}: {exc}") from exc
    return digest.hexdigest()
