"""
Opcode-protocol interpreter (Ember 2.x HTMLBars templates).

Such a template declares its bindings instead of calling hooks:

- buildFragment(dom) builds the static fragment,
- buildRenderNodes(dom, fragment, contextualElement) returns the morph slots,
- statements holds one tagged array per slot, in the same order,
- templates holds the nested templates referenced by block statements.

Statement tags: inline, attribute, element, content, block. The compiler
appends a source location (["loc", ...]) after the positional arguments;
anything past them is ignored.
Expression tags (inside params and hashes): get, concat, subexpr.
Anything that is not an array is a literal.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..document import VirtualDocument
from ..dom import ElementNode, MorphNode, Node
from ..errors import (
    InvalidArtifactError,
    ShapeError,
    StructuralMismatchError,
    UnknownOpcodeError,
)
from ..morphs import AttributeMorph, BlockMorph, ContentMorph, ElementMorph, InlineMorph
from ..values import ConcatValue, LiteralValue, PathValue, SubexprValue, Value
from .artifact import REVISION_PATTERN, member

logger = logging.getLogger(__name__)


class ExpressionOp(Enum):
    GET = "get"
    CONCAT = "concat"
    SUBEXPR = "subexpr"


class StatementOp(Enum):
    INLINE = "inline"
    ATTRIBUTE = "attribute"
    ELEMENT = "element"
    CONTENT = "content"
    BLOCK = "block"


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _split(array: Sequence[Any], kind: str, enum_type: type) -> tuple:
    if not array:
        raise ShapeError(f"Empty {kind} array")
    tag = array[0]
    try:
        op = enum_type(tag)
    except ValueError:
        raise UnknownOpcodeError(kind, tag) from None
    return op, list(array[1:])


def _arity(op: Enum, args: List[Any], minimum: int, maximum: Optional[int] = None) -> None:
    """Without a maximum, trailing elements (the compiler's ["loc", ...]) are ignored."""
    if len(args) < minimum or (maximum is not None and len(args) > maximum):
        if maximum is None:
            expected = f"at least {minimum}"
        else:
            expected = str(minimum) if minimum == maximum else f"{minimum}-{maximum}"
        raise ShapeError(
            f"'{op.value}' expects {expected} arguments, got {len(args)}: {args!r}"
        )


# ---- expressions ----

def convert_param(param: Any) -> Value:
    if not _is_array(param):
        return LiteralValue(param)
    return evaluate_expression(param)


def convert_params(params: Any) -> List[Value]:
    """["a", ["get", "foo"]] -> [LiteralValue('a'), PathValue('foo')]"""
    if params is None:
        return []
    if not _is_array(params):
        raise ShapeError(f"Expected a params array, got {type(params).__name__}")
    return [convert_param(param) for param in params]


def convert_hash(hash: Any) -> Dict[str, Value]:
    """["a", 10, "b", ["get", "c"]] -> {a: LiteralValue(10), b: PathValue('c')}"""
    if hash is None:
        return {}
    if not _is_array(hash):
        raise ShapeError(f"Expected a hash array, got {type(hash).__name__}")
    if len(hash) % 2:
        raise ShapeError(f"Hash array has an odd number of elements: {list(hash)!r}")

    result: Dict[str, Value] = {}
    for i in range(0, len(hash), 2):
        result[str(hash[i])] = convert_param(hash[i + 1])
    return result


def evaluate_expression(expression: Sequence[Any]) -> Value:
    """Evaluates an expression array, recursing into nested expressions."""
    op, args = _split(expression, "expression", ExpressionOp)

    if op == ExpressionOp.GET:
        _arity(op, args, 1, 1)
        if not isinstance(args[0], str):
            raise ShapeError(f"'get' expects a path string, got {args[0]!r}")
        return PathValue(args[0])
    elif op == ExpressionOp.CONCAT:
        _arity(op, args, 1, 1)
        return ConcatValue(convert_params(args[0]))
    elif op == ExpressionOp.SUBEXPR:
        _arity(op, args, 1, 3)
        name, params, hash = (args + [None, None])[:3]
        return SubexprValue(_expect_name(op, name), convert_params(params), convert_hash(hash))
    else:
        raise UnknownOpcodeError("expression", op.value)


# ---- statements ----

def _expect_name(op: Enum, name: Any) -> str:
    if not isinstance(name, str):
        raise ShapeError(f"'{op.value}' expects a name string, got {name!r}")
    return name


def _expect_slot(op: Enum, morph: Any) -> MorphNode:
    if not isinstance(morph, MorphNode):
        raise ShapeError(f"'{op.value}' statement needs a morph slot, got {type(morph).__name__}")
    return morph


def _child_template(op: Enum, templates: Sequence[Any], index: Any) -> Node:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(templates):
        raise ShapeError(
            f"'{op.value}' references template {index!r}, "
            f"but only {len(templates)} templates are declared"
        )
    return decompile_opcode_template(templates[index])


def evaluate_statement(morph: Any, statement: Sequence[Any], templates: Sequence[Any]) -> None:
    """Attaches the value or morph described by `statement` to its slot."""
    if not _is_array(statement):
        raise ShapeError(f"Statement must be an array, got {type(statement).__name__}")
    op, args = _split(statement, "statement", StatementOp)
    logger.debug("Statement %s %r", op.value, args[:1])

    if op == StatementOp.INLINE:
        _arity(op, args, 3)
        name, params, hash = args[:3]
        _expect_slot(op, morph).morph = InlineMorph(
            _expect_name(op, name), convert_params(params), convert_hash(hash)
        )
    elif op == StatementOp.ATTRIBUTE:
        _arity(op, args, 2)
        if not isinstance(morph, AttributeMorph):
            raise ShapeError(f"'attribute' statement needs an attribute morph, got {type(morph).__name__}")
        morph.value = convert_param(args[1])
    elif op == StatementOp.ELEMENT:
        _arity(op, args, 3)
        name, params, hash = args[:3]
        element = getattr(morph, "parent", None)
        if not isinstance(element, ElementNode):
            raise ShapeError("'element' statement needs a slot attached to an element")
        element.element_morphs.append(ElementMorph(
            _expect_name(op, name), convert_params(params), convert_hash(hash)
        ))
    elif op == StatementOp.CONTENT:
        _arity(op, args, 1)
        _expect_slot(op, morph).morph = ContentMorph(args[0])
    elif op == StatementOp.BLOCK:
        _arity(op, args, 5)
        name, params, hash, template_index, inverse_index = args[:5]
        slot = _expect_slot(op, morph)
        block_name = _expect_name(op, name)
        slot.morph = BlockMorph(
            block_name,
            convert_params(params),
            convert_hash(hash),
            _child_template(op, templates, template_index),
            _child_template(op, templates, inverse_index) if inverse_index is not None else None,
        )
    else:
        raise UnknownOpcodeError("statement", op.value)


# ---- templates ----

def validate_opcode_template(template: Any) -> None:
    """Raises InvalidArtifactError naming the first missing or malformed member."""

    def invalid(member_name: str, problem: str) -> InvalidArtifactError:
        return InvalidArtifactError(
            f"Template is an invalid Ember v2.x template: {member_name} {problem}",
            member=member_name,
        )

    if not template:
        raise invalid("template", "is empty")
    if not member(template, "meta"):
        raise invalid("meta", "is missing")

    revision = member(member(template, "meta"), "revision")
    if not revision:
        raise invalid("meta.revision", "is missing")
    if not isinstance(revision, str):
        raise invalid("meta.revision", f"must be a string, got {type(revision).__name__}")
    if not REVISION_PATTERN.search(revision):
        raise invalid("meta.revision", f"'{revision}' has no recognizable version")

    for name in ("buildFragment", "buildRenderNodes"):
        if not callable(member(template, name)):
            raise invalid(name, "must be a function")
    for name in ("statements", "templates"):
        if not _is_array(member(template, name)):
            raise invalid(name, "must be an array")


def decompile_opcode_template(template: Any) -> Node:
    """Builds the fragment, then binds every render node to its statement."""
    validate_opcode_template(template)

    dom = VirtualDocument()
    fragment = member(template, "buildFragment")(dom)
    if not isinstance(fragment, Node):
        raise ShapeError(f"buildFragment() must return a fragment, got {type(fragment).__name__}")

    morphs = member(template, "buildRenderNodes")(dom, fragment, None)
    if not _is_array(morphs):
        raise ShapeError(f"buildRenderNodes() must return an array, got {type(morphs).__name__}")

    statements = member(template, "statements")
    templates = member(template, "templates")
    if len(morphs) != len(statements):
        raise StructuralMismatchError(expected=len(statements), actual=len(morphs))

    for morph, statement in zip(morphs, statements):
        evaluate_statement(morph, statement, templates)

    return fragment


__all__ = [
    "ExpressionOp",
    "StatementOp",
    "convert_param",
    "convert_params",
    "convert_hash",
    "evaluate_expression",
    "evaluate_statement",
    "validate_opcode_template",
    "decompile_opcode_template",
]
