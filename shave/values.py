"""
Expression values recovered from compiled templates.

A value appears in two rendering contexts:

- inline: the right-hand side of an attribute, <a href=VALUE>
- value: an argument of a helper, {{ helper key=VALUE }}

Literals and paths render differently in the two contexts; concatenations
and subexpressions carry their own quoting and render identically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class ValueType(Enum):
    """Kinds of expression values."""
    LITERAL = "literal"
    PATH = "path"
    CONCAT = "concat"
    SUBEXPR = "subexpr"


def format_primitive(value: Any) -> str:
    """
    Natural template-syntax text of a primitive.

    Booleans and None follow the template language spelling,
    integral floats lose their fractional part.
    """
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Value(ABC):
    """Base class for all expression values."""

    @abstractmethod
    def get_type(self) -> ValueType:
        """Returns the value kind."""
        pass

    @abstractmethod
    def to_inline_string(self) -> str:
        """Renders the value in the context of <tag attr=VALUE>."""
        pass

    @abstractmethod
    def to_value_string(self) -> str:
        """Renders the value in the context of {{ helper key=VALUE }}."""
        pass


@dataclass(frozen=True)
class LiteralValue(Value):
    """
    A string, number or boolean written directly in the template.

    Strings are single-quoted in both contexts.
    """
    value: Any

    def get_type(self) -> ValueType:
        return ValueType.LITERAL

    def to_inline_string(self) -> str:
        return self.to_value_string()

    def to_value_string(self) -> str:
        if isinstance(self.value, str):
            return "'" + self.value + "'"
        return format_primitive(self.value)

    def to_raw_string(self) -> str:
        """Unquoted text, as contributed to a concatenation."""
        return format_primitive(self.value)


@dataclass(frozen=True)
class PathValue(Value):
    """
    foo.bar

    The path is echoed verbatim, it is never resolved against data.
    """
    path: str

    def get_type(self) -> ValueType:
        return ValueType.PATH

    def to_inline_string(self) -> str:
        return "{{ " + self.path + " }}"

    def to_value_string(self) -> str:
        return self.path


@dataclass(frozen=True)
class ConcatValue(Value):
    """
    "Foo {{ foo.bar }} bar"

    Literal parts contribute raw text, everything else its inline form.
    """
    parts: List[Value] = field(default_factory=list)

    def get_type(self) -> ValueType:
        return ValueType.CONCAT

    def to_inline_string(self) -> str:
        return self.to_value_string()

    def to_value_string(self) -> str:
        rendered = []
        for part in self.parts:
            if isinstance(part, LiteralValue):
                rendered.append(part.to_raw_string())
            else:
                rendered.append(part.to_inline_string())
        return '"' + "".join(rendered) + '"'


@dataclass(frozen=True)
class SubexprValue(Value):
    """
    {{ helper param... key=value... }}

    Hash insertion order is the rendering order.
    """
    name: str
    params: List[Value] = field(default_factory=list)
    hash: Dict[str, Value] = field(default_factory=dict)

    def get_type(self) -> ValueType:
        return ValueType.SUBEXPR

    def to_inline_string(self) -> str:
        return self.to_value_string()

    def to_value_string(self) -> str:
        return "{{ " + render_call(self.name, self.params, self.hash) + " }}"


def render_call(name: str, params: List[Value], hash: Dict[str, Value]) -> str:
    """
    Joins a helper name, its params and its hash pairs with single spaces.

    Empty groups contribute no whitespace.
    """
    param_string = " ".join(p.to_value_string() for p in params)
    hash_string = " ".join(f"{key}={value.to_value_string()}" for key, value in hash.items())

    return (
        name
        + (" " + param_string if param_string else "")
        + (" " + hash_string if hash_string else "")
    )


def as_value(raw: Any) -> Value:
    """Wraps anything that is not already a Value in a LiteralValue."""
    if isinstance(raw, Value):
        return raw
    return LiteralValue(raw)


AnyValue = Union[LiteralValue, PathValue, ConcatValue, SubexprValue]

__all__ = [
    "ValueType",
    "Value",
    "LiteralValue",
    "PathValue",
    "ConcatValue",
    "SubexprValue",
    "AnyValue",
    "as_value",
    "format_primitive",
    "render_call",
]
