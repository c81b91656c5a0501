"""Relaypub: versioned artifact release pipeline.

Resolves the next semantic version, runs the external build, stages the
produced archives under a version-scoped directory, records them with
their SHA-256 checksums in a JSON manifest, and publishes both to a
remote host over ssh/scp, repointing the ``*-latest`` aliases.
"""

__version__ = "0.2.0"

from relaypub.core.orchestrator import Orchestrator
from relaypub.models.config import PipelineConfig, RemoteTarget

__all__ = ["Orchestrator", "PipelineConfig", "RemoteTarget", "__version__"]
