"""Pipeline configuration models — passed explicitly into the Orchestrator."""

from __future__ import annotations

import posixpath
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BUILD_SCRIPT = Path("../RelayClient/build/build-all.sh")


class RemoteTarget(BaseModel):
    """Where releases are published: ``user@host[:port]`` plus a base directory."""

    model_config = ConfigDict(frozen=True)

    host: str = "host.ext"
    port: int | None = Field(default=None, ge=1, le=65535)
    user: str = "user"
    base_dir: str = "/home/user/www/public_html"

    @classmethod
    def from_host_port(
        cls, host_port: str, *, user: str, base_dir: str
    ) -> RemoteTarget:
        """Build a target from a ``host[:port]`` string."""
        host, sep, port = host_port.partition(":")
        if sep and not port.isdigit():
            raise ValueError(f"invalid port in host {host_port!r}")
        return cls(
            host=host,
            port=int(port) if sep else None,
            user=user,
            base_dir=base_dir,
        )

    @property
    def login(self) -> str:
        return f"{self.user}@{self.host}"

    @property
    def root(self) -> str:
        """Base directory without a trailing slash (``/`` stays ``/``)."""
        return self.base_dir.rstrip("/") or "/"

    def path(self, *parts: str) -> str:
        return posixpath.join(self.root, *parts)


class PipelineConfig(BaseModel):
    """Everything one release run needs to know.

    Built once by the CLI (or a test) and handed to the Orchestrator;
    nothing in the pipeline reads global state.
    """

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    source_dir: Path = Path("../RelayClient")
    version: str | None = None  # explicit override; None means auto-bump
    remote: RemoteTarget = RemoteTarget()
    manifest_path: Path = Path("relayClient.json")
    release_dir: Path = Path("downloads")
    build_script: Path = DEFAULT_BUILD_SCRIPT
    artifact_extension: str = ".zip"
