"""
Run context - accumulates action outputs and resolves variable references.

A Context lives for exactly one workflow run. Actions only see it through
a ContextView, which reads outputs but cannot record or consume them. It is open while actions
execute, and consumed once take_outputs() hands the accumulated outputs
back to the caller. Using a consumed context raises ContextConsumedError.

References have the form <action>.<field>:
- <action> matches [A-Za-z0-9_]+
- <field> is everything after the first separator, taken verbatim
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

from .constants import ACTION_NAME_PATTERN, REFERENCE_SEPARATOR
from .output import Output
from .value import Value

logger = logging.getLogger(__name__)

REFERENCE_RE = re.compile(rf"({ACTION_NAME_PATTERN})(?:{re.escape(REFERENCE_SEPARATOR)}(.*))?", re.DOTALL)

# ${reference} placeholders, $${ escapes a literal ${
PLACEHOLDER_RE = re.compile(r"\$\$\{|\$\{([^}]*)\}")


class VariableError(LookupError):
    """Base class for variable resolution failures."""


class InvalidSyntaxError(VariableError):
    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Invalid variable syntax: {reference!r}")


class UnknownActionError(VariableError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown action: {action}")


class MissingVarNameError(VariableError):
    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Missing variable name in reference: {reference!r}")


class UnknownVarError(VariableError):
    def __init__(self, action: str, var: str):
        self.action = action
        self.var = var
        super().__init__(f"Unknown variable {var!r} in outputs of action {action}")


class ContextConsumedError(RuntimeError):
    """Raised when a context is used after take_outputs()."""


class Context:
    """Per-run accumulator of action outputs, in execution order."""

    def __init__(self, workflow_name: str):
        self._workflow_name = workflow_name
        self._outputs: dict[str, Output] | None = {}

    def _open_outputs(self) -> dict[str, Output]:
        if self._outputs is None:
            raise ContextConsumedError(f"Context of workflow {self._workflow_name} has already been consumed")
        return self._outputs

    @property
    def workflow_name(self) -> str:
        self._open_outputs()
        return self._workflow_name

    @property
    def consumed(self) -> bool:
        return self._outputs is None

    @property
    def outputs(self) -> Mapping[str, Output]:
        """Read-only view of everything recorded so far."""
        return MappingProxyType(self._open_outputs())

    def output(self, action_name: str) -> Output | None:
        return self._open_outputs().get(action_name)

    def value(self, action_name: str, var_name: str) -> Value | None:
        output = self.output(action_name)
        return output.value(var_name) if output is not None else None

    def update(self, action_name: str, output: Output) -> None:
        """Record the output of an action. A repeated name overwrites the previous output."""
        outputs = self._open_outputs()
        if action_name in outputs:
            logger.debug(f"Overwriting output of {action_name} in workflow {self._workflow_name}")
        outputs[action_name] = output

    def view(self) -> ContextView:
        """Read-only view handed to actions."""
        return ContextView(self)

    def take_outputs(self) -> dict[str, Output]:
        """Consume the context and return the accumulated outputs."""
        outputs = self._open_outputs()
        self._outputs = None
        return outputs

    def resolve(self, reference: str) -> Value:
        """
        Resolve a <action>.<field> reference against recorded outputs.

        Checks run in order: syntax, action, field name, variable.

        Raises:
            InvalidSyntaxError: No leading action name of the allowed charset
            UnknownActionError: The action has not run in this context
            MissingVarNameError: Nothing follows the action name
            UnknownVarError: The action's output has no such variable
        """
        outputs = self._open_outputs()
        match = REFERENCE_RE.fullmatch(reference)
        if match is None:
            raise InvalidSyntaxError(reference)

        action_name, var_name = match.group(1), match.group(2)
        output = outputs.get(action_name)
        if output is None:
            raise UnknownActionError(action_name)

        if not var_name:
            raise MissingVarNameError(reference)

        value = output.value(var_name)
        if value is None:
            raise UnknownVarError(action_name, var_name)
        return value

    def render(self, template: str) -> str:
        """
        Replace every ${<action>.<field>} in template with the resolved value's text.

        Resolution errors propagate. Write $${ for a literal ${.
        """

        def repl(match: re.Match) -> str:
            reference = match.group(1)
            if reference is None:
                return "${"
            return self.resolve(reference).to_text()

        self._open_outputs()
        return PLACEHOLDER_RE.sub(repl, template)

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else f"{len(self._outputs)} outputs"
        return f"Context(workflow_name={self._workflow_name!r}, {state})"


class ContextView:
    """
    Read-only window on a Context.

    Reads go through to the live context, so an action sees every output
    recorded before it ran. There is no way to record or consume outputs
    through a view.
    """

    __slots__ = ("_context",)

    def __init__(self, context: Context):
        self._context = context

    @property
    def workflow_name(self) -> str:
        return self._context.workflow_name

    @property
    def outputs(self) -> Mapping[str, Output]:
        return self._context.outputs

    def output(self, action_name: str) -> Output | None:
        return self._context.output(action_name)

    def value(self, action_name: str, var_name: str) -> Value | None:
        return self._context.value(action_name, var_name)

    def resolve(self, reference: str) -> Value:
        return self._context.resolve(reference)

    def render(self, template: str) -> str:
        return self._context.render(template)

    def __repr__(self) -> str:
        return f"ContextView({self._context!r})"
