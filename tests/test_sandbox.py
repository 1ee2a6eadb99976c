"""
Tests for executing source in a restricted namespace and for alias paths.
"""

from types import SimpleNamespace

import pytest

from shave.errors import PathConflictError
from shave.sandbox import BLOCKED_BUILTINS, Executor, PythonExecutor, define_path, safe_builtins, safe_eval


class TestSafeEval:

    def test_returns_namespace(self):
        result = safe_eval("foo = 1 + 2")
        assert result == {"foo": 3}

    def test_sees_context(self):
        result = safe_eval("bar = foo * 2", {"foo": 21})
        assert result["bar"] == 42

    def test_clones_context_by_default(self):
        context = {"foo": 1}
        safe_eval("foo = 2\nbar = 3", context)
        assert context == {"foo": 1}

    def test_modifies_context_without_clone(self):
        context = {"foo": 1}
        safe_eval("foo = 2", context, clone=False)
        assert context == {"foo": 2}

    def test_shallow_clone_shares_values(self):
        items = []
        safe_eval("items.append(1)", {"items": items})
        assert items == [1]

    def test_interpreter_keys_do_not_leak(self):
        context = {}
        safe_eval("x = 1", context, clone=False)
        assert set(context) == {"x"}

    def test_safe_builtins_still_work(self):
        result = safe_eval("n = len([1, 2, 3])\nd = dict(a=1)")
        assert result["n"] == 3
        assert result["d"] == {"a": 1}

    @pytest.mark.parametrize("source", [
        "import os",
        "open('/etc/hostname')",
        "eval('1')",
        "__import__('os')",
    ])
    def test_host_access_is_blocked(self, source):
        with pytest.raises((ImportError, NameError)):
            safe_eval(source)

    def test_errors_propagate(self):
        with pytest.raises(ZeroDivisionError):
            safe_eval("1 / 0")

    def test_custom_executor(self):
        class Recorder:
            def __init__(self):
                self.calls = []

            def execute(self, source, namespace):
                self.calls.append(source)
                namespace["ran"] = True

        recorder = Recorder()
        assert isinstance(recorder, Executor)
        assert safe_eval("anything", executor=recorder) == {"ran": True}
        assert recorder.calls == ["anything"]


def test_blocked_names_are_absent_from_builtins():
    names = set(safe_builtins())
    assert not names & BLOCKED_BUILTINS
    assert "len" in names


def test_python_executor_reports_filename():
    with pytest.raises(SyntaxError) as exc:
        PythonExecutor(filename="broken.py").execute("def", {})
    assert exc.value.filename == "broken.py"


class TestDefinePath:

    def test_single_segment(self):
        root = {}
        define_path(root, True, "foo")
        assert root == {"foo": True}

    def test_creates_intermediates(self):
        root = {}
        define_path(root, True, "foo.bar")
        assert root["foo"].bar is True

    def test_reuses_existing_containers(self):
        root = {"foo": {"baz": 1}}
        define_path(root, True, "foo.bar")
        assert root == {"foo": {"baz": 1, "bar": True}}

    def test_attribute_containers(self):
        root = SimpleNamespace(foo=SimpleNamespace(baz=1))
        define_path(root, True, "foo.bar.qux")
        assert root.foo.baz == 1
        assert root.foo.bar.qux is True

    def test_overwrites_last_segment(self):
        root = {"foo": 1}
        define_path(root, 2, "foo")
        assert root == {"foo": 2}

    def test_empty_path_is_ignored(self):
        root = {}
        define_path(root, True, "")
        assert root == {}

    @pytest.mark.parametrize("taken", [1, "str", True, len])
    def test_non_container_in_the_way(self, taken):
        root = {"foo": taken}
        with pytest.raises(PathConflictError) as exc:
            define_path(root, True, "foo.bar")
        assert exc.value.segment == "foo"
        assert isinstance(exc.value, TypeError)

    @pytest.mark.parametrize("falsy", [None, False, 0, 0.0, ""])
    def test_falsy_segment_is_replaced(self, falsy):
        root = {"foo": falsy}
        define_path(root, True, "foo.bar")
        assert root["foo"].bar is True

    def test_empty_container_is_reused(self):
        inner = {}
        root = {"foo": inner}
        define_path(root, True, "foo.bar")
        assert root["foo"] is inner
        assert inner == {"bar": True}
