"""Relaypub data models — all Pydantic v2, all frozen (immutable)."""

from relaypub.models.config import PipelineConfig, RemoteTarget
from relaypub.models.manifest import ArtifactLink, ReleaseEntry
from relaypub.models.results import CommandResult, PublishReport, ReleaseResult
from relaypub.models.versioning import ZERO_VERSION, SemanticVersion

__all__ = [
    # versioning
    "SemanticVersion",
    "ZERO_VERSION",
    # manifest
    "ArtifactLink",
    "ReleaseEntry",
    # config
    "PipelineConfig",
    "RemoteTarget",
    # results
    "CommandResult",
    "PublishReport",
    "ReleaseResult",
]
