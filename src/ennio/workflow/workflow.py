"""Workflow definition."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..actions import Action, check_action_name

if TYPE_CHECKING:
    from ..output import Output
    from ..runners import RunnerCallbacks, RunnerProtocol


class Workflow:
    """
    A named, ordered, immutable sequence of actions.

    Action names must be valid reference identifiers and unique within the
    workflow, since outputs are recorded by name.
    """

    def __init__(self, name: str, actions: Iterable[Action] = ()):
        self._name = name
        self._actions = tuple(actions)

        seen: set[str] = set()
        for action in self._actions:
            check_action_name(action.name)
            if action.name in seen:
                raise ValueError(f"Duplicate action name in workflow {name}: {action.name}")
            seen.add(action.name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def actions(self) -> tuple[Action, ...]:
        return self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"Workflow(name={self._name!r}, actions={[a.name for a in self._actions]!r})"

    def run(
        self,
        callbacks: RunnerCallbacks | None = None,
        logger: logging.Logger | None = None,
        runner: RunnerProtocol | None = None,
    ) -> dict[str, Output]:
        """
        Execute every action in order and return the outputs by action name.

        All actions always run, whatever the status of earlier ones.

        Args:
            callbacks: Optional callbacks for progress reporting
            logger: Logger for progress lines, used by the default runner
            runner: Runner to execute with (default: SequentialRunner)
        """
        if runner is None:
            from ..runners import SequentialRunner

            runner = SequentialRunner(logger=logger)
        return runner.run(self, callbacks).outputs
