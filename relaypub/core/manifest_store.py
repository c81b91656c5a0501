"""Manifest store — the JSON file that records every published release.

The manifest is the single source of truth for which versions exist.
A missing file is an empty manifest; a file that does not parse is fatal.
Writes are atomic: a temp file in the same directory is renamed over the
target so readers never observe a half-written manifest.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from relaypub.core.errors import ManifestCorrupt, ReleaseIOError
from relaypub.models.manifest import ReleaseEntry

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(list[ReleaseEntry])


def upsert_entry(
    entries: list[ReleaseEntry], new_entry: ReleaseEntry
) -> list[ReleaseEntry]:
    """Return a new list with *new_entry* replacing its version, or appended.

    A replaced entry keeps its position. The input list is not modified.
    """
    updated = list(entries)
    for index, entry in enumerate(updated):
        if entry.version == new_entry.version:
            updated[index] = new_entry
            return updated
    updated.append(new_entry)
    return updated


class ManifestStore:
    """Loads and persists the ordered list of release entries.

    Parameters
    ----------
    path:
        Location of the manifest JSON file.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[ReleaseEntry]:
        """Return the persisted entries.

        If the file does not exist an empty manifest is written first and
        an empty list returned. Raises ManifestCorrupt if the file exists
        but is not a valid manifest.
        """
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            logger.info("Manifest %s not found, creating an empty one.", self._path)
            self.save([])
            return []
        except OSError as exc:
            raise ReleaseIOError(f"cannot read manifest {self._path}: {exc}") from exc

        try:
            data = json.loads(raw)
            if data is None:
                return []
            entries = _ENTRIES.validate_python(data)
        except (ValueError, ValidationError) as exc:
            raise ManifestCorrupt(f"manifest {self._path} is corrupt: {exc}") from exc

        logger.debug("Loaded %d entries from %s.", len(entries), self._path)
        return entries

    def save(self, entries: list[ReleaseEntry]) -> None:
        """Serialize all entries and atomically replace the manifest file."""
        payload = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as exc:
            raise ReleaseIOError(f"cannot write manifest {self._path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.chmod(tmp, 0o644)
            os.replace(tmp, self._path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise ReleaseIOError(f"cannot write manifest {self._path}: {exc}") from exc

        logger.debug("Wrote %d entries to %s.", len(entries), self._path)
