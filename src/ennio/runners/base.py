"""Base runner classes and protocols."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from ..output import Output, Status

if TYPE_CHECKING:
    from ..workflow import Workflow


@dataclass
class RunnerResult:
    """Result of running a workflow: every action's output, in execution order."""

    workflow_name: str
    outputs: dict[str, Output] = field(default_factory=dict)

    def count(self, status: Status) -> int:
        return sum(1 for output in self.outputs.values() if output.status == status)

    @property
    def failed(self) -> list[str]:
        """Names of the actions that failed."""
        return [name for name, output in self.outputs.items() if output.status == Status.FAILED]

    @property
    def success(self) -> bool:
        return not self.failed


@dataclass
class RunnerCallbacks:
    """
    Callbacks for runner progress reporting.

    Allows CLI to display progress without coupling runner to Rich/UI.
    All callbacks are optional - if None, no callback is made.
    """

    # Workflow lifecycle
    on_workflow_start: Callable[[str, int], None] | None = None  # name, total_actions
    on_workflow_complete: Callable[[RunnerResult], None] | None = None

    # Action lifecycle
    on_action_start: Callable[[str, int, int], None] | None = None  # name, index, total
    on_action_complete: Callable[[str, Output], None] | None = None  # name, output


class RunnerProtocol(Protocol):
    """Protocol for workflow runners."""

    def run(self, workflow: Workflow, callbacks: RunnerCallbacks | None = None) -> RunnerResult:
        """
        Execute a workflow.

        Args:
            workflow: The workflow to execute
            callbacks: Optional callbacks for progress reporting

        Returns:
            RunnerResult with every action's output
        """
        ...
