"""Action results - terminal status plus named output values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .value import Value, to_value


class Status(Enum):
    """Effect of an action. Descriptive only, never gates later actions."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    FAILED = "failed"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Output:
    """
    Result of one action execution.

    Outputs are immutable: vars is a read-only mapping, and add_var and
    with_vars return new instances, so an Output recorded in a Context
    never changes afterwards.
    """

    status: Status
    vars: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.status, Status):
            raise TypeError(f"Output status must be a Status, got {type(self.status).__name__}")
        entries = self.vars or {}
        object.__setattr__(
            self, "vars", MappingProxyType({name: to_value(value) for name, value in entries.items()})
        )

    def __eq__(self, other):
        if not isinstance(other, Output):
            return NotImplemented
        return self.status == other.status and dict(self.vars) == dict(other.vars)

    def __hash__(self):
        return hash((self.status, frozenset(self.vars.items())))

    def __repr__(self) -> str:
        return f"Output(status={self.status!r}, vars={dict(self.vars)!r})"

    def add_var(self, name: str, value: Value | Any) -> Output:
        """Return a copy with name bound to value (overwrites an existing binding)."""
        return Output(self.status, {**self.vars, name: to_value(value)})

    def with_vars(self, entries: Mapping[str, Value | Any]) -> Output:
        """Return a copy whose vars are replaced entirely."""
        return Output(self.status, entries)

    def value(self, name: str) -> Value | None:
        return self.vars.get(name)

    def to_dict(self) -> dict:
        """Plain representation for reports and JSON output."""
        return {
            "status": self.status.value,
            "vars": {name: value.to_builtins() for name, value in self.vars.items()},
        }

    def to_tagged(self) -> dict:
        """Lossless representation, see Output.from_tagged."""
        return {
            "status": self.status.value,
            "vars": {name: value.to_dict() for name, value in self.vars.items()},
        }

    @classmethod
    def from_tagged(cls, data: Mapping[str, Any]) -> Output:
        entries = {name: Value.from_dict(item) for name, item in data.get("vars", {}).items()}
        return cls(Status(data["status"]), entries)
