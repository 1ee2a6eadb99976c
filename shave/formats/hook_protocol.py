"""
Hook-protocol interpreter (Ember 1.x HTMLBars templates).

Such a template exposes render(context, env, contextualElement). It builds
its own fragment through env.dom and reports every binding by calling a
named hook from env.hooks. The hooks here never look data up: they turn
their arguments into values and morphs, and attach those to the slot or
element they were handed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..document import VirtualDocument
from ..dom import ElementNode, MorphNode, Node
from ..errors import InvalidArtifactError, ShapeError
from ..morphs import AttributeMorph, BlockMorph, ContentMorph, ElementMorph, InlineMorph
from ..values import ConcatValue, PathValue, SubexprValue, Value, as_value
from .artifact import member

logger = logging.getLogger(__name__)


def convert_params(params: Any) -> List[Value]:
    """['a', get(env, ctx, 'foo')] -> [LiteralValue('a'), PathValue('foo')]"""
    if not isinstance(params, (list, tuple)):
        raise ShapeError(f"Expected a params list, got {type(params).__name__}")
    return [as_value(param) for param in params]


def convert_hash(hash: Any) -> Dict[str, Value]:
    """Same as convert_params for a {name: value} hash; key order is kept."""
    if hash is None:
        return {}
    if not isinstance(hash, Mapping):
        raise ShapeError(f"Expected a hash mapping, got {type(hash).__name__}")
    return {str(key): as_value(value) for key, value in hash.items()}


def _expect_name(name: Any, hook: str) -> str:
    if not isinstance(name, str):
        raise ShapeError(f"{hook}(): expected a helper name, got {type(name).__name__}")
    return name


def _expect_slot(morph: Any, hook: str) -> MorphNode:
    if not isinstance(morph, MorphNode):
        raise ShapeError(f"{hook}(): expected a morph slot, got {type(morph).__name__}")
    return morph


class HookTable:
    """
    The hooks a compiled template may call.

    Hook names and argument order follow the HTMLBars hook contract.
    """

    def get(self, env: Any, context: Any, path: Any) -> PathValue:
        if not isinstance(path, str):
            raise ShapeError(f"get(): expected a path string, got {type(path).__name__}")
        return PathValue(path)

    def concat(self, env: Any, params: Any) -> ConcatValue:
        return ConcatValue(convert_params(params))

    def subexpr(self, env: Any, context: Any, name: Any, params: Any, hash: Any) -> SubexprValue:
        return SubexprValue(
            _expect_name(name, "subexpr"),
            convert_params(params),
            convert_hash(hash),
        )

    def inline(self, env: Any, morph: Any, context: Any, name: Any, params: Any, hash: Any) -> None:
        _expect_slot(morph, "inline").morph = InlineMorph(
            _expect_name(name, "inline"),
            convert_params(params),
            convert_hash(hash),
        )

    def attribute(self, env: Any, morph: Any, element: Any, name: Any, value: Any) -> None:
        if not isinstance(morph, AttributeMorph):
            raise ShapeError(f"attribute(): expected an attribute morph, got {type(morph).__name__}")
        morph.value = as_value(value)

    def element(self, env: Any, element: Any, context: Any, name: Any, params: Any, hash: Any) -> None:
        if not isinstance(element, ElementNode):
            raise ShapeError(f"element(): expected an element, got {type(element).__name__}")
        element.element_morphs.append(ElementMorph(
            _expect_name(name, "element"),
            convert_params(params),
            convert_hash(hash),
        ))

    def content(self, env: Any, morph: Any, context: Any, content: Any) -> None:
        _expect_slot(morph, "content").morph = ContentMorph(content)

    def block(
        self,
        env: Any,
        morph: Any,
        context: Any,
        name: Any,
        params: Any,
        hash: Any,
        template: Any,
        inverse: Any = None,
    ) -> None:
        slot = _expect_slot(morph, "block")
        block_name = _expect_name(name, "block")
        if template is None:
            raise ShapeError(f"block(): '{block_name}' has no template")

        logger.debug("Decompiling block '%s' (inverse: %s)", block_name, inverse is not None)
        slot.morph = BlockMorph(
            block_name,
            convert_params(params),
            convert_hash(hash),
            decompile_hook_template(template),
            decompile_hook_template(inverse) if inverse is not None else None,
        )

    def __getitem__(self, name: str) -> Any:
        if name not in HOOK_NAMES:
            raise KeyError(name)
        return getattr(self, name)


HOOK_NAMES = ("get", "concat", "subexpr", "inline", "attribute", "element", "content", "block")


@dataclass
class HookEnvironment:
    """The `env` argument of render(): the document plus the hook table."""
    dom: VirtualDocument
    hooks: HookTable = field(default_factory=HookTable)

    def __getitem__(self, name: str) -> Any:
        if name == "dom":
            return self.dom
        if name == "hooks":
            return self.hooks
        raise KeyError(name)


def decompile_hook_template(template: Any) -> Node:
    """
    Runs the template's render() against a fresh recording document
    and returns the fragment it produced.
    """
    render = member(template, "render")
    if not callable(render):
        raise InvalidArtifactError(
            "Template is an invalid Ember v1.x template: render() is missing",
            member="render",
        )

    env = HookEnvironment(dom=VirtualDocument())
    context: Optional[Any] = None
    fragment = render(context, env, None)

    if not isinstance(fragment, Node):
        raise ShapeError(f"render() must return a fragment, got {type(fragment).__name__}")
    return fragment


__all__ = [
    "HookTable",
    "HookEnvironment",
    "HOOK_NAMES",
    "convert_params",
    "convert_hash",
    "decompile_hook_template",
]
