"""Command runner capability.

The pipeline never spawns processes directly; it goes through a
``Runner`` so the builder and the remote transport can be driven by a
fake in tests.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from relaypub.models.results import CommandResult

logger = logging.getLogger(__name__)

# Exit status reported when the executable itself cannot be started
# (the same code a POSIX shell uses for "command not found").
COMMAND_NOT_FOUND = 127


@runtime_checkable
class Runner(Protocol):
    """Protocol for synchronous command execution backends.

    Any object with an ``execute(command, args) -> CommandResult`` method
    satisfies this protocol.
    """

    def execute(self, command: str, args: Sequence[str]) -> CommandResult:
        """Run *command* with *args* to completion and report its exit status."""
        ...


class SubprocessRunner:
    """Runs commands as child processes sharing this process's stdio.

    Output streams straight to the operator's terminal, and stdin is
    inherited so ssh/scp can prompt for credentials. There is no timeout;
    a command runs until it exits or is killed externally.
    """

    def execute(self, command: str, args: Sequence[str]) -> CommandResult:
        argv = (command, *args)
        logger.debug("exec: %s", " ".join(argv))
        try:
            completed = subprocess.run(argv, check=False)
        except OSError as exc:
            logger.error("Cannot start %s: %s", command, exc)
            return CommandResult(command=argv, returncode=COMMAND_NOT_FOUND)
        return CommandResult(command=argv, returncode=completed.returncode)
