"""Release orchestrator — the central coordinator for one release run.

Sequence::

    load manifest -> resolve version -> build -> stage + checksum
        -> upsert entry -> save manifest -> publish (skipped when dry)

Any ReleaseError aborts the run where it happened. Completed steps are
left as they are; re-running with the same version is safe.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from relaypub.core.builder import BuildInvoker
from relaypub.core.errors import ReleaseIOError
from relaypub.core.manifest_store import ManifestStore, upsert_entry
from relaypub.core.publisher import RemotePublisher
from relaypub.core.runner import Runner, SubprocessRunner
from relaypub.core.stager import ArtifactStager
from relaypub.core.transport import SshTransport
from relaypub.core.version_resolver import resolve_version
from relaypub.models.config import PipelineConfig
from relaypub.models.manifest import ArtifactLink, ReleaseEntry
from relaypub.models.results import PublishReport, ReleaseResult

logger = logging.getLogger(__name__)


class Orchestrator:
    """Drives a release from version resolution to remote publication.

    Parameters
    ----------
    config:
        Run configuration. Uses defaults if not provided.
    runner:
        Executes the build script and the ssh/scp commands. A
        SubprocessRunner is used if not provided.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        runner: Runner | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.runner = runner or SubprocessRunner()

        self.manifest = ManifestStore(self.config.manifest_path)
        self.builder = BuildInvoker(self.config.build_script, self.runner)
        self.stager = ArtifactStager(self.config.artifact_extension)
        self.transport = SshTransport(self.config.remote, self.runner)
        self.publisher = RemotePublisher(
            self.transport, release_dir=self.config.release_dir.as_posix()
        )

    def version_dir(self, version: str) -> Path:
        return self.config.release_dir / version

    def next_version(self) -> str:
        """The version a run would release now. Only creates an absent manifest."""
        entries = self.manifest.load()
        return str(resolve_version(entries, self.config.version))

    def run(self) -> ReleaseResult:
        """Execute the full release and return its summary."""
        cfg = self.config
        try:
            cfg.release_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ReleaseIOError(
                f"cannot create release directory {cfg.release_dir}: {exc}"
            ) from exc

        entries = self.manifest.load()
        version = str(resolve_version(entries, cfg.version))

        self.builder.build(version)

        version_dir = self.version_dir(version)
        files = self.stager.stage(cfg.source_dir, version_dir, version)

        links = [
            ArtifactLink(
                path=(version_dir / name).as_posix(),
                checksum=self.stager.checksum(version_dir / name),
            )
            for name in files
        ]
        entry = ReleaseEntry(version=version, timestamp=time.time_ns(), links=links)
        self.manifest.save(upsert_entry(entries, entry))
        logger.info("Recorded %s with %d file(s) in %s.", version, len(links), cfg.manifest_path)

        report: PublishReport | None = None
        if cfg.dry_run:
            logger.info("Dry run: skipping remote publication.")
        else:
            report = self.publisher.publish(
                version,
                [version_dir / name for name in files],
                cfg.manifest_path,
            )

        return ReleaseResult(
            version=version,
            version_dir=version_dir,
            files=files,
            entry=entry,
            dry_run=cfg.dry_run,
            publish=report,
        )
