"""Sequential runner - Executes workflow actions one at a time."""

from __future__ import annotations

import logging

from ..actions import Action
from ..context import Context, ContextView
from ..output import Output, Status
from ..workflow import Workflow
from .base import RunnerCallbacks, RunnerResult

module_logger = logging.getLogger(__name__)


class SequentialRunner:
    """
    Sequential workflow runner.

    Executes actions one at a time in declared order against a single
    Context, handing each action a read-only view of it. A failed or
    skipped action never stops the run: its output is recorded and the
    next action executes.
    """

    def __init__(self, logger: logging.Logger | None = None):
        """
        Initialize the runner.

        Args:
            logger: Logger for progress lines (default: this module's logger)
        """
        self.logger = logger or module_logger

    def run(self, workflow: Workflow, callbacks: RunnerCallbacks | None = None) -> RunnerResult:
        """
        Execute a workflow.

        Args:
            workflow: The Workflow to execute
            callbacks: Optional callbacks for progress reporting

        Returns:
            RunnerResult with the output of every action
        """
        cb = callbacks or RunnerCallbacks()
        total = len(workflow.actions)
        ctx = Context(workflow.name)

        if cb.on_workflow_start:
            cb.on_workflow_start(workflow.name, total)

        for index, action in enumerate(workflow.actions, start=1):
            if cb.on_action_start:
                cb.on_action_start(action.name, index, total)

            self.logger.info(f"[{workflow.name}] Executing {action.name}")
            output = self._run_action(action, ctx.view(), workflow.name)
            self.logger.info(f"[{workflow.name}] {action.name} terminated with status {output.status}")
            ctx.update(action.name, output)

            if cb.on_action_complete:
                cb.on_action_complete(action.name, output)

        result = RunnerResult(workflow_name=workflow.name, outputs=ctx.take_outputs())

        if cb.on_workflow_complete:
            cb.on_workflow_complete(result)

        return result

    def _run_action(self, action: Action, ctx: ContextView, workflow_name: str) -> Output:
        """Run one action, turning an escaped exception into a FAILED output."""
        try:
            output = action.run(ctx)
        except Exception as e:
            self.logger.exception(f"[{workflow_name}] {action.name} raised an exception")
            return Output(Status.FAILED).add_var("stderr", f"{type(e).__name__}: {e}")

        if not isinstance(output, Output):
            self.logger.error(f"[{workflow_name}] {action.name} returned {type(output).__name__}, not an Output")
            return Output(Status.FAILED).add_var("stderr", f"Action returned {type(output).__name__}, not an Output")
        return output
