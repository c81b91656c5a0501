"""Result records returned by the runner, the publisher and the pipeline."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from relaypub.models.manifest import ReleaseEntry


class CommandResult(BaseModel):
    """Outcome of one external command."""

    model_config = ConfigDict(frozen=True)

    command: tuple[str, ...]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class PublishReport(BaseModel):
    """What the remote publisher did for one version."""

    model_config = ConfigDict(frozen=True)

    version: str
    remote_dir: str
    transferred: list[str] = Field(default_factory=list)
    manifest_remote_dir: str = ""
    aliases: dict[str, str] = Field(default_factory=dict)  # alias path -> target path


class ReleaseResult(BaseModel):
    """Summary of a completed pipeline run."""

    model_config = ConfigDict(frozen=True)

    version: str
    version_dir: Path
    files: list[str]
    entry: ReleaseEntry
    dry_run: bool = False
    publish: PublishReport | None = None
