"""Shared test fixtures for Relaypub."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from relaypub.core.manifest_store import ManifestStore
from relaypub.models.config import PipelineConfig, RemoteTarget
from relaypub.models.manifest import ArtifactLink, ReleaseEntry
from relaypub.models.results import CommandResult


class FakeRunner:
    """Records every command instead of running it.

    Calls whose argv contains a registered substring return the
    registered exit status; everything else succeeds.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._failures: list[tuple[str, int]] = []

    def fail_matching(self, needle: str, returncode: int = 1) -> None:
        self._failures.append((needle, returncode))

    def execute(self, command: str, args: Sequence[str]) -> CommandResult:
        argv = (command, *args)
        self.calls.append(argv)
        joined = " ".join(argv)
        for needle, code in self._failures:
            if needle in joined:
                return CommandResult(command=argv, returncode=code)
        return CommandResult(command=argv, returncode=0)

    def commands(self, name: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def manifest_store(tmp_path: Path) -> ManifestStore:
    """Provide a ManifestStore pointing at a not-yet-existing file."""
    return ManifestStore(tmp_path / "relayClient.json")


@pytest.fixture
def remote() -> RemoteTarget:
    return RemoteTarget(host="dl.example.org", port=2222, user="deploy", base_dir="/srv/www/")


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory with a build script and a source dir holding client.zip."""
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "RelayClient"
    (source / "build").mkdir(parents=True)
    (source / "build" / "build-all.sh").write_text("#!/bin/bash\nexit 0\n")
    (source / "client.zip").write_bytes(b"PK\x03\x04 client payload")
    return tmp_path


@pytest.fixture
def pipeline_config(workspace: Path, remote: RemoteTarget) -> PipelineConfig:
    return PipelineConfig(
        source_dir=workspace / "RelayClient",
        build_script=workspace / "RelayClient" / "build" / "build-all.sh",
        manifest_path=Path("relayClient.json"),
        release_dir=Path("downloads"),
        remote=remote,
    )


@pytest.fixture
def make_entry() -> Callable[..., ReleaseEntry]:
    """Factory fixture: build a ReleaseEntry with deterministic links."""

    def _factory(
        version: str,
        *,
        timestamp: int = 1_700_000_000_000_000_000,
        files: int = 1,
    ) -> ReleaseEntry:
        links = [
            ArtifactLink(
                path=f"downloads/{version}/pkg{i}-{version}.zip",
                checksum=f"{i:x}".rjust(64, "a"),
            )
            for i in range(files)
        ]
        return ReleaseEntry(version=version, timestamp=timestamp, links=links)

    return _factory
