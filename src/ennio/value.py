"""
Typed value model for action outputs.

A Value is a recursive tagged union:
- Bool, PositiveInt (u64), NegativeInt (i64), String
- List of Values
- Map of str -> Value

Positive and negative integers are distinct variants: NegativeInt(5) is not
equal to PositiveInt(5), and the tagged encoding keeps them apart on
round-trip. Plain builtins only pick the variant from the sign.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar

from .constants import NEGATIVE_INT_MAX, NEGATIVE_INT_MIN, POSITIVE_INT_MAX


@dataclass(frozen=True)
class Value:
    """Base class of the value variants. Instantiate a concrete variant."""

    type_name: ClassVar[str] = ""
    _variants: ClassVar[dict[str, type[Value]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.type_name:
            Value._variants[cls.type_name] = cls

    def __post_init__(self):
        if type(self) is Value:
            raise TypeError("Value cannot be instantiated, use a concrete variant")

    def to_builtins(self) -> Any:
        """Convert to plain Python data (JSON/YAML compatible, integer variant is lost)."""
        return self.value

    def to_dict(self) -> dict:
        """Convert to the tagged form that round-trips exactly."""
        return {"type": self.type_name, "value": self._tagged_payload()}

    def to_text(self) -> str:
        """Textual rendering used when interpolating into strings."""
        return str(self.value)

    def _tagged_payload(self) -> Any:
        return self.value

    @classmethod
    def _from_payload(cls, payload: Any) -> Value:
        return cls(payload)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Value:
        """
        Rebuild a Value from its tagged form.

        Raises:
            ValueError: If data is not a mapping, or the type tag is missing or unknown
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Invalid tagged value: {data!r}")
        type_name = data.get("type")
        variant = cls._variants.get(type_name) if isinstance(type_name, str) else None
        if variant is None or "value" not in data:
            raise ValueError(f"Invalid tagged value: {data!r}")
        return variant._from_payload(data["value"])


def _check_int(variant: str, value: Any, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{variant} expects an int, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{variant} out of range [{low}, {high}]: {value}")


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    type_name: ClassVar[str] = "bool"

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool expects a bool, got {type(self.value).__name__}")

    def to_text(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PositiveInt(Value):
    """Unsigned 64-bit integer."""

    value: int

    type_name: ClassVar[str] = "positive_int"

    def __post_init__(self):
        _check_int("PositiveInt", self.value, 0, POSITIVE_INT_MAX)


@dataclass(frozen=True)
class NegativeInt(Value):
    """Signed 64-bit integer. May hold non-negative numbers when the source is signed."""

    value: int

    type_name: ClassVar[str] = "negative_int"

    def __post_init__(self):
        _check_int("NegativeInt", self.value, NEGATIVE_INT_MIN, NEGATIVE_INT_MAX)


@dataclass(frozen=True)
class String(Value):
    value: str

    type_name: ClassVar[str] = "string"

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"String expects a str, got {type(self.value).__name__}")

    def to_text(self) -> str:
        return self.value


@dataclass(frozen=True)
class List(Value):
    """Ordered sequence of Values, stored as a tuple."""

    value: tuple[Value, ...] = ()

    type_name: ClassVar[str] = "list"

    def __post_init__(self):
        items = tuple(self.value)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"List items must be Values, got {type(item).__name__}")
        object.__setattr__(self, "value", items)

    def __len__(self) -> int:
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def to_builtins(self) -> list:
        return [item.to_builtins() for item in self.value]

    def to_text(self) -> str:
        return json.dumps(self.to_builtins(), separators=(",", ":"), ensure_ascii=False)

    def _tagged_payload(self) -> list:
        return [item.to_dict() for item in self.value]

    @classmethod
    def _from_payload(cls, payload: Any) -> List:
        return cls([Value.from_dict(item) for item in payload])


@dataclass(frozen=True)
class Map(Value):
    """String-keyed mapping of Values. Equality ignores insertion order."""

    value: Mapping[str, Value] = field(default_factory=dict)

    type_name: ClassVar[str] = "map"

    def __post_init__(self):
        entries = dict(self.value)
        for key, item in entries.items():
            if not isinstance(key, str):
                raise TypeError(f"Map keys must be str, got {type(key).__name__}")
            if not isinstance(item, Value):
                raise TypeError(f"Map values must be Values, got {type(item).__name__} for {key!r}")
        object.__setattr__(self, "value", MappingProxyType(entries))

    def __eq__(self, other):
        if type(other) is not Map:
            return NotImplemented
        return dict(self.value) == dict(other.value)

    def __hash__(self):
        return hash((Map, frozenset(self.value.items())))

    def __repr__(self) -> str:
        return f"Map(value={dict(self.value)!r})"

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, key: str) -> Value:
        return self.value[key]

    def get(self, key: str) -> Value | None:
        return self.value.get(key)

    def to_builtins(self) -> dict:
        return {key: item.to_builtins() for key, item in self.value.items()}

    def to_text(self) -> str:
        return json.dumps(self.to_builtins(), separators=(",", ":"), ensure_ascii=False)

    def _tagged_payload(self) -> dict:
        return {key: item.to_dict() for key, item in self.value.items()}

    @classmethod
    def _from_payload(cls, payload: Any) -> Map:
        return cls({key: Value.from_dict(item) for key, item in payload.items()})


def to_value(obj: Any) -> Value:
    """
    Convert Python data into a Value.

    Integers pick their variant from the sign: >= 0 is PositiveInt,
    < 0 is NegativeInt. Construct NegativeInt explicitly for signed
    sources holding a non-negative number.

    Raises:
        TypeError: If obj (or a nested item) has no matching variant
        ValueError: If an integer is outside the 64-bit range
    """
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return PositiveInt(obj) if obj >= 0 else NegativeInt(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, Mapping):
        return Map({key: to_value(item) for key, item in obj.items()})
    if isinstance(obj, (list, tuple)):
        return List([to_value(item) for item in obj])
    raise TypeError(f"Cannot convert {type(obj).__name__} to a Value")
