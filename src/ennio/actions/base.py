"""Action interface - named units of work run once per workflow run."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..constants import ACTION_NAME_PATTERN
from ..output import Output

if TYPE_CHECKING:
    from ..context import ContextView

ACTION_NAME_RE = re.compile(ACTION_NAME_PATTERN)


def is_valid_action_name(name: str) -> bool:
    """Check that name only uses the characters allowed in references."""
    return isinstance(name, str) and ACTION_NAME_RE.fullmatch(name) is not None


def check_action_name(name: str) -> str:
    if not is_valid_action_name(name):
        raise ValueError(f"Invalid action name {name!r}: must match {ACTION_NAME_PATTERN}")
    return name


class Action(ABC):
    """
    A named unit of work.

    run() receives a read-only view of the current run. It may read the
    outputs of actions that ran before it, and must return exactly one Output.
    Failures are reported as Status.FAILED outputs, not raised.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def run(self, ctx: ContextView) -> Output: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CallableAction(Action):
    """Action backed by a plain function taking the context view."""

    def __init__(self, name: str, fn: Callable[[ContextView], Output]):
        self._name = check_action_name(name)
        self.fn = fn

    @property
    def name(self) -> str:
        return self._name

    def run(self, ctx: ContextView) -> Output:
        return self.fn(ctx)
