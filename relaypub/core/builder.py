"""Build invocation — runs the external build script for a version."""

from __future__ import annotations

import logging
from pathlib import Path

from relaypub.core.errors import BuildFailed, BuildScriptMissing
from relaypub.core.runner import Runner

logger = logging.getLogger(__name__)


class BuildInvoker:
    """Runs ``bash <script> <version>`` and fails hard on a non-zero exit.

    Cleanup of partial build output is the script's own business.
    """

    def __init__(self, script: Path | str, runner: Runner, *, shell: str = "bash") -> None:
        self._script = Path(script)
        self._runner = runner
        self._shell = shell

    @property
    def script(self) -> Path:
        return self._script

    def build(self, version: str) -> None:
        if not self._script.is_file():
            raise BuildScriptMissing(f"cannot find build script {str(self._script)!r}")

        logger.info("Building version %s with %s.", version, self._script)
        result = self._runner.execute(self._shell, [str(self._script), version])
        if not result.ok:
            raise BuildFailed(
                f"{self._script.name} failed for version {version} "
                f"(exit status {result.returncode})"
            )
