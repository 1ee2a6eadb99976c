"""
Node tree built by the recording document.

The tree mirrors what a real DOM would contain after the compiled template
ran, with MorphNode placeholders standing in for dynamic content. Rendering
is recursive and threads the indent through every call; nothing else in the
package formats output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .morphs import AttributeMorph, ElementMorph, Morph
from .errors import ShapeError
from .rendering import RenderOptions, indent_step, pad


class NodeType(Enum):
    """Kinds of tree nodes."""
    FRAGMENT = "fragment"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    MORPH = "morph"


@dataclass(eq=False)
class Node(ABC):
    """Base class for all nodes. Child order is output order."""
    children: List[Node] = field(default_factory=list, init=False)

    @abstractmethod
    def get_type(self) -> NodeType:
        """Returns the node kind."""
        pass

    @abstractmethod
    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        pass

    def __str__(self) -> str:
        return self.to_string()


@dataclass(eq=False)
class FragmentNode(Node):
    """Root of a template, renders its children one per line."""

    def get_type(self) -> NodeType:
        return NodeType.FRAGMENT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return "\n".join(child.to_string(indent, options) for child in self.children)


@dataclass(eq=False)
class ElementNode(Node):
    """
    An HTML element with static attributes, bound attributes,
    element helpers and children.
    """
    tag_name: str = ""
    namespace: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    attribute_morphs: List[AttributeMorph] = field(default_factory=list)
    element_morphs: List[ElementMorph] = field(default_factory=list)

    def get_type(self) -> NodeType:
        return NodeType.ELEMENT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        attributes_string = " ".join(f"{key}='{value}'" for key, value in self.attributes.items())
        attribute_morph_string = " ".join(morph.to_string() for morph in self.attribute_morphs)
        element_morph_string = " ".join(morph.to_string() for morph in self.element_morphs)

        step = indent_step(options)
        children_string = ""
        if self.children:
            children_string = "\n".join(
                child.to_string(indent + step, options) for child in self.children
            ) + "\n"

        return (
            pad(indent) + "<" + self.tag_name
            + (" " + attributes_string if attributes_string else "")
            + (" " + attribute_morph_string if attribute_morph_string else "")
            + (" " + element_morph_string if element_morph_string else "")
            + ">\n" + children_string
            + pad(indent) + "</" + self.tag_name + ">"
        )


@dataclass(eq=False)
class TextNode(Node):
    contents: str = ""

    def get_type(self) -> NodeType:
        return NodeType.TEXT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return pad(indent) + self.contents


@dataclass(eq=False)
class CommentNode(Node):
    contents: str = ""

    def get_type(self) -> NodeType:
        return NodeType.COMMENT

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        return pad(indent) + "<!-- " + self.contents + " -->"


@dataclass(eq=False)
class MorphNode(Node):
    """
    Placeholder for a tree-level morph.

    The document creates it empty; the interpreter attaches the morph later.
    `parent` is a back reference only, the parent owns this node.
    """
    morph: Optional[Morph] = None
    parent: Optional[Node] = field(default=None, repr=False)

    def get_type(self) -> NodeType:
        return NodeType.MORPH

    def to_string(self, indent: int = 0, options: Optional[RenderOptions] = None) -> str:
        if self.morph is None:
            raise ShapeError("Morph placeholder was never bound to a morph")
        return pad(indent) + self.morph.to_string(indent, options)


__all__ = [
    "NodeType",
    "Node",
    "FragmentNode",
    "ElementNode",
    "TextNode",
    "CommentNode",
    "MorphNode",
]
