"""
Tests for revision detection and dispatch to the matching interpreter.
"""

from types import SimpleNamespace

import pytest

from shave.dom import FragmentNode
from shave.errors import InvalidArtifactError, UnsupportedVersionError
from shave.formats.artifact import find_revision, major_version, member
from shave.loader import TemplateFormat, detect_format, load_template
from tests.infrastructure import Case, fragment, text, to_hook_template, to_opcode_template


@pytest.mark.parametrize("revision, expected", [
    ("Ember@1.10.0", 1),
    ("Ember@1.13.13", 1),
    ("Ember@2.6.0+4eb55108", 2),
    ("HTMLBars@0.14 Ember@2.0.0", 2),
    ("Ember@12.1", 12),
    ("HTMLBars@0.14.0", None),
    ("", None),
])
def test_major_version(revision, expected):
    assert major_version(revision) == expected


def test_member_reads_mappings_and_objects():
    assert member({"a": 1}, "a") == 1
    assert member(SimpleNamespace(a=1), "a") == 1
    assert member({}, "a", "dflt") == "dflt"
    assert member(None, "a") is None


def test_find_revision_prefers_top_level():
    assert find_revision({"revision": "Ember@1.12.0"}) == "Ember@1.12.0"
    assert find_revision({"meta": {"revision": "Ember@2.0.0"}}) == "Ember@2.0.0"
    assert find_revision(SimpleNamespace(meta=SimpleNamespace(revision="Ember@2.1.0"))) == "Ember@2.1.0"
    assert find_revision({"meta": {}}) is None


class TestDetectFormat:

    def test_hooks(self):
        assert detect_format({"revision": "Ember@1.12.2"}) == ("Ember@1.12.2", TemplateFormat.HOOKS)

    def test_opcodes(self):
        assert detect_format({"meta": {"revision": "Ember@2.6.0"}}) == ("Ember@2.6.0", TemplateFormat.OPCODES)

    def test_missing_revision(self):
        with pytest.raises(InvalidArtifactError, match="revision missing"):
            detect_format({"statements": []})

    def test_not_a_template(self):
        with pytest.raises(InvalidArtifactError):
            detect_format(None)

    @pytest.mark.parametrize("revision", ["Ember@3.0.0", "Ember@0.9", "Glimmer@1.0"])
    def test_unsupported_revision(self, revision):
        with pytest.raises(UnsupportedVersionError, match="Unsupported HTMLBars/Ember version") as exc:
            detect_format({"revision": revision})
        assert exc.value.revision == revision


class TestLoadTemplate:

    def test_hook_template(self):
        loaded = load_template(to_hook_template(Case(build=fragment(text("Foo")))))
        assert loaded.format == TemplateFormat.HOOKS
        assert loaded.revision.startswith("Ember@1.")
        assert isinstance(loaded.root, FragmentNode)
        assert loaded.root.to_string() == "Foo"

    def test_opcode_template(self):
        loaded = load_template(to_opcode_template(Case(build=fragment(text("Foo")))))
        assert loaded.format == TemplateFormat.OPCODES
        assert loaded.revision.startswith("Ember@2.")
        assert loaded.root.to_string() == "Foo"

    def test_hook_revision_on_opcode_shaped_template(self):
        artifact = to_opcode_template(Case(build=fragment(text("Foo"))))
        artifact["revision"] = "Ember@1.13.0"
        with pytest.raises(InvalidArtifactError) as exc:
            load_template(artifact)
        assert exc.value.member == "render"
