"""Error taxonomy for the release pipeline.

Every error here is fatal to a run. Nothing is retried; recovery is
re-running the pipeline once the cause is fixed, which is safe because
each step is idempotent.
"""

from __future__ import annotations


class ReleaseError(RuntimeError):
    """Base class for all fatal release pipeline errors."""


class ManifestCorrupt(ReleaseError):
    """The manifest file exists but does not parse against the schema."""


class ReleaseIOError(ReleaseError, OSError):
    """A local file could not be read or written."""


class InvalidVersion(ReleaseError, ValueError):
    """An explicit version string is not a full semantic version."""


class BuildScriptMissing(ReleaseError):
    """The external build script was not found."""


class BuildFailed(ReleaseError):
    """The external build script exited with a non-zero status."""


class NoArtifactsFound(ReleaseError):
    """The source directory holds no matching artifacts."""


class RemoteDirError(ReleaseError):
    """The remote version directory could not be created."""


class TransferError(ReleaseError):
    """A file could not be copied to the remote host."""


class AliasUpdateError(ReleaseError):
    """A ``*-latest`` alias could not be repointed on the remote host."""
