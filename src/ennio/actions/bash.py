"""Bash action - runs a script with `bash -ec`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..command import Command
from ..context import VariableError
from ..output import Output, Status
from ..value import NegativeInt
from .base import Action, check_action_name

if TYPE_CHECKING:
    from ..context import ContextView

logger = logging.getLogger(__name__)


class BashAction(Action):
    """
    Run a bash script and expose its streams as output variables.

    ${action.field} references in the script are replaced with values from
    earlier actions before execution. Outcome mapping:
        exit 0            -> CHANGED (stdout, stderr, exit_code)
        exit != 0         -> FAILED  (stdout, stderr, exit_code)
        spawn error       -> FAILED  (stderr)
        unresolved ${...} -> FAILED  (stderr), script not executed
    """

    def __init__(self, name: str, script: str, program: str = "bash"):
        self._name = check_action_name(name)
        self.script = script
        self.program = program

    @property
    def name(self) -> str:
        return self._name

    def command(self, script: str) -> Command:
        return Command(self.program).with_args(["-ec", script])

    def run(self, ctx: ContextView) -> Output:
        try:
            script = ctx.render(self.script)
        except VariableError as e:
            logger.error(f"Unable to render script of {self.name}: {e}")
            return Output(Status.FAILED).add_var("stderr", str(e))

        try:
            result = self.command(script).execute()
        except OSError as e:
            logger.error(f"Unable to execute script: {e}")
            return Output(Status.FAILED).add_var("stderr", str(e))

        if result.success:
            logger.debug("Script executed successfully")
            status = Status.CHANGED
        else:
            logger.debug(f"Script execution failed:\n{result.stderr}")
            status = Status.FAILED

        output = Output(status).add_var("stdout", result.stdout).add_var("stderr", result.stderr)
        if not result.killed_by_signal:
            output = output.add_var("exit_code", NegativeInt(result.returncode))
        return output
