"""Remote publisher — pushes a staged version and repoints its aliases.

Steps run strictly in order and the first failure aborts the run:

1. ``ENSURE_REMOTE_DIR`` — ``mkdir -p`` the remote version directory.
2. ``TRANSFER_ARTIFACTS`` — upload each staged file, in staging order.
3. ``TRANSFER_MANIFEST`` — upload the manifest into the remote base dir.
4. ``UPDATE_ALIASES`` — repoint ``<base>-latest<ext>`` at each new file.

Nothing is rolled back. Every step is idempotent, so re-running the same
version after a fix completes whatever was left undone.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from relaypub.core.errors import AliasUpdateError, RemoteDirError, TransferError
from relaypub.core.transport import SshTransport
from relaypub.models.results import PublishReport

logger = logging.getLogger(__name__)


class PublishStep(str, Enum):
    ENSURE_REMOTE_DIR = "ensure_remote_dir"
    TRANSFER_ARTIFACTS = "transfer_artifacts"
    TRANSFER_MANIFEST = "transfer_manifest"
    UPDATE_ALIASES = "update_aliases"
    DONE = "done"


def alias_name(filename: str, version: str) -> str:
    """``client-1.2.3.zip`` -> ``client-latest.zip``.

    Raises AliasUpdateError if *filename* does not carry *version*.
    """
    marker = f"-{version}"
    index = filename.rfind(marker)
    suffix = filename[index + len(marker):] if index > 0 else None
    if suffix is None or (suffix and not suffix.startswith(".")):
        raise AliasUpdateError(f"{filename!r} is not a versioned name for {version}")
    return f"{filename[:index]}-latest{suffix}"


class RemotePublisher:
    """Publishes one version's files and manifest through a transport.

    Parameters
    ----------
    transport:
        Remote host access (directory creation, upload, symlink).
    release_dir:
        Name of the downloads directory under the remote base directory.
    """

    def __init__(self, transport: SshTransport, release_dir: str = "downloads") -> None:
        self._transport = transport
        self._release_dir = release_dir.strip("/")
        self._step = PublishStep.ENSURE_REMOTE_DIR

    @property
    def step(self) -> PublishStep:
        """The step in progress, or the step that failed."""
        return self._step

    def remote_version_dir(self, version: str) -> str:
        return self._transport.target.path(self._release_dir, version)

    def publish(
        self,
        version: str,
        files: list[Path],
        manifest_path: Path,
    ) -> PublishReport:
        """Run all four steps for *version* and report what was done."""
        target = self._transport.target
        releases_root = target.path(self._release_dir)
        version_dir = self.remote_version_dir(version)

        self._step = PublishStep.ENSURE_REMOTE_DIR
        logger.info("Ensuring remote directory %s on %s.", version_dir, target.host)
        result = self._transport.make_dirs(version_dir)
        if not result.ok:
            raise RemoteDirError(
                f"failed to create {version_dir} on {target.host} "
                f"(exit status {result.returncode})"
            )

        self._step = PublishStep.TRANSFER_ARTIFACTS
        transferred: list[str] = []
        for local in files:
            logger.info("Uploading %s to %s.", local.name, version_dir)
            result = self._transport.upload(local, version_dir)
            if not result.ok:
                raise TransferError(
                    f"upload of {local} to {version_dir} failed "
                    f"(exit status {result.returncode})"
                )
            transferred.append(local.name)

        self._step = PublishStep.TRANSFER_MANIFEST
        logger.info("Uploading manifest %s to %s.", manifest_path, target.root)
        result = self._transport.upload(manifest_path, target.root)
        if not result.ok:
            raise TransferError(
                f"upload of manifest {manifest_path} to {target.root} failed "
                f"(exit status {result.returncode})"
            )

        self._step = PublishStep.UPDATE_ALIASES
        aliases: dict[str, str] = {}
        for name in transferred:
            link = f"{releases_root}/{alias_name(name, version)}"
            dest = f"{version_dir}/{name}"
            logger.info("Repointing %s -> %s.", link, dest)
            result = self._transport.symlink(dest, link)
            if not result.ok:
                raise AliasUpdateError(
                    f"updating alias {link} for {name} failed "
                    f"(exit status {result.returncode})"
                )
            aliases[link] = dest

        self._step = PublishStep.DONE
        return PublishReport(
            version=version,
            remote_dir=version_dir,
            transferred=transferred,
            manifest_remote_dir=target.root,
            aliases=aliases,
        )
