"""Remote transport — ssh/scp command construction over a Runner.

Every remote operation is a single blocking command:

* directory creation: ``ssh [-p PORT] user@host 'mkdir -p DIR'``
* file transfer:      ``scp [-P PORT] LOCAL user@host:DIR``
* alias repoint:      ``ssh [-p PORT] user@host 'ln -sfn T L.tmp && mv -Tf L.tmp L'``

The alias is built next to its final name and renamed over it, so a
reader on the remote host sees either the old or the new target.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from relaypub.core.runner import Runner
from relaypub.models.config import RemoteTarget
from relaypub.models.results import CommandResult

logger = logging.getLogger(__name__)


class SshTransport:
    """Talks to one remote host through the ``ssh`` and ``scp`` binaries.

    Parameters
    ----------
    target:
        Host, port, login user and base directory.
    runner:
        Executes the commands; a fake in tests.
    """

    def __init__(
        self,
        target: RemoteTarget,
        runner: Runner,
        *,
        ssh: str = "ssh",
        scp: str = "scp",
    ) -> None:
        self._target = target
        self._runner = runner
        self._ssh = ssh
        self._scp = scp

    @property
    def target(self) -> RemoteTarget:
        return self._target

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def make_dirs(self, remote_dir: str) -> CommandResult:
        """Create *remote_dir* and its parents; succeeds if it exists."""
        return self._remote_shell(f"mkdir -p {shlex.quote(remote_dir)}")

    def upload(self, local_path: Path | str, remote_dir: str) -> CommandResult:
        """Copy one local file into *remote_dir*, keeping its filename."""
        args: list[str] = []
        if self._target.port is not None:
            args += ["-P", str(self._target.port)]
        args += [str(local_path), f"{self._target.login}:{remote_dir}"]
        logger.debug("scp %s -> %s:%s", local_path, self._target.host, remote_dir)
        return self._runner.execute(self._scp, args)

    def symlink(self, target_path: str, link_path: str) -> CommandResult:
        """Create or replace the symlink *link_path* -> *target_path*."""
        staging = f"{link_path}.tmp"
        script = (
            f"ln -sfn {shlex.quote(target_path)} {shlex.quote(staging)}"
            f" && mv -Tf {shlex.quote(staging)} {shlex.quote(link_path)}"
        )
        return self._remote_shell(script)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _remote_shell(self, script: str) -> CommandResult:
        args: list[str] = []
        if self._target.port is not None:
            args += ["-p", str(self._target.port)]
        args += [self._target.login, script]
        logger.debug("ssh %s: %s", self._target.host, script)
        return self._runner.execute(self._ssh, args)

    def __repr__(self) -> str:
        port = f":{self._target.port}" if self._target.port is not None else ""
        return f"SshTransport({self._target.login}{port})"
