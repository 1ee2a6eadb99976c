"""
Recording virtual document.

Implements the document-building surface a compiled template calls while it
builds its fragment and render nodes. Every call mutates the node tree
immediately; nothing is built in the background.

The Python methods are snake_case. Compiled templates call the camelCase
names of the browser DOM helper, which are provided as aliases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .dom import CommentNode, ElementNode, FragmentNode, MorphNode, Node, TextNode
from .errors import ShapeError
from .morphs import AttributeMorph

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ElementSlot:
    """Handle returned for an element modifier; the statement attaches to `parent`."""
    parent: ElementNode = field(repr=False)


class VirtualDocument:
    """
    Document stand-in handed to compiled templates.

    One instance per decompiled template; instances are never shared.
    """

    # Templates check this before reusing a cached fragment.
    can_clone = False
    canClone = can_clone

    def __init__(self):
        self.namespace: Optional[str] = None

    # ---- node creation ----

    def create_document_fragment(self) -> FragmentNode:
        return FragmentNode()

    def create_element(self, tag_name: str, namespace: Optional[str] = None) -> ElementNode:
        return ElementNode(tag_name=tag_name, namespace=namespace or self.namespace)

    def create_text_node(self, text: str) -> TextNode:
        return TextNode(contents=text)

    def create_comment(self, text: str) -> CommentNode:
        return CommentNode(contents=text)

    # ---- structure ----

    def append_child(self, parent: Node, child: Node) -> Node:
        _expect_node(parent, "appendChild parent")
        _expect_node(child, "appendChild child")
        parent.children.append(child)
        if isinstance(child, MorphNode):
            child.parent = parent
        return child

    def set_attribute(self, element: ElementNode, name: str, value: Any) -> None:
        _expect_element(element, "setAttribute")
        element.attributes[name] = str(value)

    def set_attribute_ns(self, element: ElementNode, namespace: Optional[str], name: str, value: Any) -> None:
        # Namespaced attributes render like plain ones.
        self.set_attribute(element, name, value)

    def child_at(self, node: Node, path: Iterable[int]) -> Node:
        """Resolves a node by a path of child indices, e.g. [0, 2]."""
        current = node
        for index in path:
            current = self.child_at_index(current, index)
        return current

    def child_at_index(self, node: Node, index: int) -> Node:
        _expect_node(node, "childAt")
        if not isinstance(index, int) or not 0 <= index < len(node.children):
            raise ShapeError(
                f"Child index {index!r} out of range for {node.get_type().value} "
                f"node with {len(node.children)} children"
            )
        return node.children[index]

    # ---- morphs ----

    def create_morph_at(
        self,
        parent: Node,
        start: int,
        end: int,
        contextual_element: Any = None,
    ) -> MorphNode:
        """
        Replaces children[start..end] (inclusive) of `parent` with a single
        placeholder and returns it.
        """
        _expect_node(parent, "createMorphAt")
        count = len(parent.children)
        if not (isinstance(start, int) and isinstance(end, int)) or not 0 <= start <= end < count:
            raise ShapeError(
                f"Invalid morph range [{start!r}, {end!r}] for a node with {count} children"
            )

        placeholder = MorphNode(parent=parent)
        parent.children[start:end + 1] = [placeholder]
        logger.debug("Morph slot at [%d, %d] in %s node", start, end, parent.get_type().value)
        return placeholder

    def create_unsafe_morph_at(
        self,
        parent: Node,
        start: int,
        end: int,
        contextual_element: Any = None,
    ) -> MorphNode:
        # No escaping distinction is modelled.
        return self.create_morph_at(parent, start, end, contextual_element)

    def create_attr_morph(
        self,
        element: ElementNode,
        name: str,
        namespace: Optional[str] = None,
    ) -> AttributeMorph:
        _expect_element(element, "createAttrMorph")
        morph = AttributeMorph(key=name, element=element)
        element.attribute_morphs.append(morph)
        return morph

    def create_unsafe_attr_morph(
        self,
        element: ElementNode,
        name: str,
        namespace: Optional[str] = None,
    ) -> AttributeMorph:
        return self.create_attr_morph(element, name, namespace)

    def create_element_morph(self, element: ElementNode, namespace: Optional[str] = None) -> ElementSlot:
        _expect_element(element, "createElementMorph")
        return ElementSlot(parent=element)

    # ---- browser-only operations, accepted and ignored ----

    def detect_namespace(self, element: Any = None) -> None:
        pass

    def set_namespace(self, namespace: Optional[str]) -> None:
        self.namespace = namespace

    def insert_boundary(self, fragment: Any, index: Any) -> None:
        pass

    # ---- compiled template call contract ----

    createDocumentFragment = create_document_fragment
    createElement = create_element
    createTextNode = create_text_node
    createComment = create_comment
    appendChild = append_child
    setAttribute = set_attribute
    setAttributeNS = set_attribute_ns
    childAt = child_at
    childAtIndex = child_at_index
    createMorphAt = create_morph_at
    createUnsafeMorphAt = create_unsafe_morph_at
    createAttrMorph = create_attr_morph
    createUnsafeAttrMorph = create_unsafe_attr_morph
    createElementMorph = create_element_morph
    detectNamespace = detect_namespace
    setNamespace = set_namespace
    insertBoundary = insert_boundary


def _expect_node(node: Any, operation: str) -> None:
    if not isinstance(node, Node):
        raise ShapeError(f"{operation}: expected a node, got {type(node).__name__}")


def _expect_element(node: Any, operation: str) -> None:
    if not isinstance(node, ElementNode):
        raise ShapeError(f"{operation}: expected an element, got {type(node).__name__}")


__all__ = ["VirtualDocument", "ElementSlot"]
