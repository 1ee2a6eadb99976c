"""
Tests for the hook-protocol interpreter.
"""

from types import SimpleNamespace

import pytest

from shave.document import VirtualDocument
from shave.dom import ElementNode, MorphNode
from shave.errors import InvalidArtifactError, ShapeError
from shave.formats.hook_protocol import (
    HOOK_NAMES,
    HookEnvironment,
    HookTable,
    convert_hash,
    convert_params,
    decompile_hook_template,
)
from shave.morphs import AttributeMorph, BlockMorph, ContentMorph, InlineMorph
from shave.values import ConcatValue, LiteralValue, PathValue, SubexprValue
from tests.infrastructure import comment, element, fragment, hook_template, text


class TestHookTable:

    def setup_method(self):
        self.hooks = HookTable()
        self.dom = VirtualDocument()
        self.env = HookEnvironment(dom=self.dom, hooks=self.hooks)

    def _slot(self) -> MorphNode:
        root = self.dom.createDocumentFragment()
        self.dom.appendChild(root, self.dom.createComment(""))
        return self.dom.createMorphAt(root, 0, 0)

    def test_get_returns_path(self):
        assert self.hooks.get(self.env, None, "foo.bar") == PathValue("foo.bar")

    def test_get_rejects_non_string(self):
        with pytest.raises(ShapeError):
            self.hooks.get(self.env, None, 10)

    def test_concat_wraps_literals(self):
        value = self.hooks.concat(self.env, ["a", PathValue("b")])
        assert value == ConcatValue([LiteralValue("a"), PathValue("b")])

    def test_subexpr(self):
        value = self.hooks.subexpr(self.env, None, "t", ["key"], {"count": 2})
        assert value == SubexprValue("t", [LiteralValue("key")], {"count": LiteralValue(2)})

    def test_inline_binds_slot(self):
        slot = self._slot()
        self.hooks.inline(self.env, slot, None, "foo", [PathValue("x")], {})
        assert slot.morph == InlineMorph("foo", [PathValue("x")], {})

    def test_content_binds_slot(self):
        slot = self._slot()
        self.hooks.content(self.env, slot, None, "foo")
        assert slot.morph == ContentMorph("foo")

    def test_attribute_sets_value(self):
        el = self.dom.createElement("a")
        morph = self.dom.createAttrMorph(el, "href")
        self.hooks.attribute(self.env, morph, el, "href", "/home")
        assert morph.value == LiteralValue("/home")

    def test_attribute_rejects_tree_slot(self):
        with pytest.raises(ShapeError):
            self.hooks.attribute(self.env, self._slot(), None, "href", "x")

    def test_element_appends_modifier(self):
        el = self.dom.createElement("button")
        self.hooks.element(self.env, el, None, "action", ["save"], None)
        self.hooks.element(self.env, el, None, "tooltip", [], {"text": "Save"})
        assert [m.helper_name for m in el.element_morphs] == ["action", "tooltip"]

    def test_element_needs_element(self):
        with pytest.raises(ShapeError):
            self.hooks.element(self.env, self._slot(), None, "action", [], {})

    def test_block_decompiles_nested_templates(self):
        slot = self._slot()
        then = hook_template(fragment(text("yes")))
        otherwise = hook_template(fragment(text("no")))
        self.hooks.block(self.env, slot, None, "if", [PathValue("ok")], {}, then, otherwise)

        assert isinstance(slot.morph, BlockMorph)
        assert slot.morph.primary.to_string() == "yes"
        assert slot.morph.alternate.to_string() == "no"

    def test_block_without_template(self):
        with pytest.raises(ShapeError, match="no template"):
            self.hooks.block(self.env, self._slot(), None, "if", [], {}, None)

    def test_params_must_be_a_list(self):
        with pytest.raises(ShapeError):
            self.hooks.inline(self.env, self._slot(), None, "foo", "bar", {})

    def test_hooks_by_name(self):
        for name in HOOK_NAMES:
            assert callable(self.hooks[name])
        with pytest.raises(KeyError):
            self.hooks["invokeHelper"]

    def test_environment_by_name(self):
        assert self.env["dom"] is self.dom
        assert self.env["hooks"] is self.hooks


def test_convert_hash_keeps_order():
    assert list(convert_hash({"z": 1, "a": 2})) == ["z", "a"]
    assert convert_hash(None) == {}
    with pytest.raises(ShapeError):
        convert_hash(["a", 1])


def test_convert_params_accepts_tuples():
    assert convert_params(("a",)) == [LiteralValue("a")]


class TestDecompileHookTemplate:

    def test_renders_with_fresh_document(self):
        seen = []

        def bind(env, context, root):
            seen.append((env.dom, context))

        template = hook_template(fragment(element("a", comment())), bind)
        decompile_hook_template(template)
        decompile_hook_template(template)

        assert seen[0][0] is not seen[1][0]
        assert seen[0][1] is None

    def test_object_template(self):
        template = SimpleNamespace(
            revision="Ember@1.11.0",
            render=lambda context, env, contextual: fragment(text("Hi"))(env.dom),
        )
        assert decompile_hook_template(template).to_string() == "Hi"

    def test_missing_render(self):
        with pytest.raises(InvalidArtifactError) as exc:
            decompile_hook_template({"revision": "Ember@1.12.0"})
        assert exc.value.member == "render"

    def test_render_must_return_node(self):
        template = {"revision": "Ember@1.12.0", "render": lambda context, env, contextual: None}
        with pytest.raises(ShapeError, match="render"):
            decompile_hook_template(template)

    def test_attribute_hook_through_render(self):
        def bind(env, context, root):
            el = env.dom.childAt(root, [0])
            morph = env.dom.createAttrMorph(el, "class")
            value = env.hooks.concat(env, ["btn ", env.hooks.get(env, context, "kind")])
            env.hooks.attribute(env, morph, el, "class", value)

        root = decompile_hook_template(hook_template(fragment(element("a")), bind))
        assert isinstance(root.children[0], ElementNode)
        assert isinstance(root.children[0].attribute_morphs[0], AttributeMorph)
        assert root.to_string() == '<a class="btn {{ kind }}">\n</a>'
