"""Artifact staging — copy build outputs into a version-scoped directory.

Layout: {dest_dir}/{base}-{version}{ext}

Only immediate, regular files of ``source_dir`` with a matching extension
are picked up. Each copy is written to a temp file and renamed into place,
so a failed copy never leaves a file that looks complete.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from relaypub.core.errors import NoArtifactsFound, ReleaseIOError
from relaypub.core.hasher import sha256_file

logger = logging.getLogger(__name__)


class ArtifactStager:
    """Discovers, renames and copies release archives.

    Parameters
    ----------
    extension:
        Archive extension to collect, matched case-insensitively.
        The staged file always carries this exact (lower-cased) extension.
    """

    def __init__(self, extension: str = ".zip") -> None:
        ext = extension.lower()
        self._extension = ext if ext.startswith(".") else f".{ext}"

    @property
    def extension(self) -> str:
        return self._extension

    def staged_name(self, filename: str, version: str) -> str:
        """``client.zip`` -> ``client-<version>.zip``."""
        base = filename[: -len(self._extension)]
        return f"{base}-{version}{self._extension}"

    def discover(self, source_dir: Path | str) -> list[Path]:
        """Matching regular files directly inside *source_dir*, sorted by name."""
        source = Path(source_dir)
        try:
            with os.scandir(source) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ReleaseIOError(f"cannot list source directory {source}: {exc}") from exc
        return [
            Path(entry.path)
            for entry in entries
            if entry.is_file() and entry.name.lower().endswith(self._extension)
            and len(entry.name) > len(self._extension)
        ]

    def stage(self, source_dir: Path | str, dest_dir: Path | str, version: str) -> list[str]:
        """Copy every discovered artifact into *dest_dir* under its versioned name.

        Returns the new filenames in discovery order. Raises
        NoArtifactsFound when nothing matched; *dest_dir* is still created.
        """
        dest = Path(dest_dir)
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ReleaseIOError(f"cannot create version directory {dest}: {exc}") from exc

        sources = self.discover(source_dir)
        if not sources:
            raise NoArtifactsFound(f"no {self._extension} files found in {source_dir}")

        staged: list[str] = []
        for src in sources:
            name = self.staged_name(src.name, version)
            copy_file(src, dest / name)
            logger.info("Staged %s -> %s", src, dest / name)
            staged.append(name)
        return staged

    @staticmethod
    def checksum(path: Path | str) -> str:
        """Lowercase SHA-256 hex digest of the file at *path*."""
        return sha256_file(path)


def copy_file(src: Path, dst: Path) -> None:
    """Copy bytes and permission bits from *src* to *dst* atomically."""
    try:
        fd, tmp = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".part", dir=dst.parent)
    except OSError as exc:
        raise ReleaseIOError(f"cannot copy {src} to {dst}: {exc}") from exc
    os.close(fd)
    try:
        shutil.copyfile(src, tmp)
        shutil.copymode(src, tmp)
        os.replace(tmp, dst)
    except OSError as exc:
        Path(tmp).unlink(missing_ok=True)
        raise ReleaseIOError(f"cannot copy {src} to {dst}: {exc}") from exc
