"""
Command module - External process invocation.

Runs a program with an argument list and captures stdout, stderr and the
exit status. Failing to spawn the process raises OSError to the caller.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of an executed command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def killed_by_signal(self) -> bool:
        # subprocess reports termination by signal N as -N
        return self.returncode < 0


@dataclass(frozen=True)
class Command:
    """A program plus its arguments."""

    program: str
    args: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def with_args(self, args: Sequence[str]) -> Command:
        """Return a copy with the argument list replaced."""
        return Command(self.program, tuple(args))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def execute(self) -> CommandResult:
        """
        Run the command and wait for it to terminate.

        Returns:
            CommandResult with decoded output (undecodable bytes replaced)

        Raises:
            OSError: If the process cannot be spawned
        """
        logger.debug(f"Executing command: {shlex.join(self.argv)}")
        try:
            proc = subprocess.run(self.argv, capture_output=True, text=True, errors="replace")
        except OSError as e:
            logger.debug(f"Unable to execute command: {e}")
            raise

        result = CommandResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
        logger.debug(f"Command terminated with exit status {result.returncode}")
        logger.debug(f"Command stdout:\n{result.stdout}")
        logger.debug(f"Command stderr:\n{result.stderr}")
        return result
