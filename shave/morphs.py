"""
Morphs: the dynamic bindings of a template.

Inline, content and block morphs live in the node tree behind a MorphNode
placeholder. Attribute and element morphs belong to their element and are
rendered inside its opening tag.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .errors import ShapeError
from .rendering import RenderOptions, indent_step, pad
from .values import Value, format_primitive, render_call

if TYPE_CHECKING:
    from .dom import ElementNode, Node


class MorphType(Enum):
    """Kinds of morphs."""
    INLINE = "inline"
    ATTRIBUTE = "attribute"
    ELEMENT = "element"
    CONTENT = "content"
    BLOCK = "block"


@dataclass
class Morph(ABC):
    """Base class for all morphs."""

    @abstractmethod
    def get_type(self) -> MorphType:
        """Returns the morph kind."""
        pass

    @abstractmethod
    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        pass

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class InlineMorph(Morph):
    """{{ helper params... key=value... }}"""
    helper_name: str
    params: List[Value] = field(default_factory=list)
    hash: Dict[str, Value] = field(default_factory=dict)

    def get_type(self) -> MorphType:
        return MorphType.INLINE

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return "{{ " + render_call(self.helper_name, self.params, self.hash) + " }}"


@dataclass
class AttributeMorph(Morph):
    """
    <tag key={{ value }}>

    Created empty by the document when the artifact declares the binding;
    the value is attached once the matching hook or statement runs.
    """
    key: str
    value: Optional[Value] = None
    element: Optional["ElementNode"] = field(default=None, repr=False, compare=False)

    def get_type(self) -> MorphType:
        return MorphType.ATTRIBUTE

    @property
    def parent(self) -> Optional["ElementNode"]:
        return self.element

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        if self.value is None:
            raise ShapeError(f"Attribute morph '{self.key}' never received a value")
        return self.key + "=" + self.value.to_inline_string()


@dataclass
class ElementMorph(Morph):
    """<tag {{ helper params... key=value... }}>"""
    helper_name: str
    params: List[Value] = field(default_factory=list)
    hash: Dict[str, Value] = field(default_factory=dict)

    def get_type(self) -> MorphType:
        return MorphType.ELEMENT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return "{{ " + render_call(self.helper_name, self.params, self.hash) + " }}"


@dataclass
class ContentMorph(Morph):
    """{{ content }}"""
    content: Any

    def get_type(self) -> MorphType:
        return MorphType.CONTENT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return "{{ " + format_primitive(self.content) + " }}"


@dataclass
class BlockMorph(Morph):
    """
    {{#name params... key=value... }}
        <primary>
    {{else}}
        <alternate>
    {{/name}}

    The else branch is omitted without an alternate. Opening, else and
    closing tags stay at the caller's indent, branches go one step deeper.
    """
    block_name: str
    params: List[Value] = field(default_factory=list)
    hash: Dict[str, Value] = field(default_factory=dict)
    primary: Optional["Node"] = None
    alternate: Optional["Node"] = None

    def get_type(self) -> MorphType:
        return MorphType.BLOCK

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        if self.primary is None:
            raise ShapeError(f"Block '{self.block_name}' has no primary template")

        step = indent_step(options)
        inner = indent + step

        out = "{{#" + render_call(self.block_name, self.params, self.hash) + " }}\n"
        out += self.primary.to_string(inner, options)
        if self.alternate is not None:
            out += "\n" + pad(indent) + "{{else}}\n"
            out += self.alternate.to_string(inner, options)
        out += "\n" + pad(indent) + "{{/" + self.block_name + "}}"
        return out


__all__ = [
    "MorphType",
    "Morph",
    "InlineMorph",
    "AttributeMorph",
    "ElementMorph",
    "ContentMorph",
    "BlockMorph",
]
