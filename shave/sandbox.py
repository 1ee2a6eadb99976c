"""
Execution of template-registering source code.

The decompiler does not isolate code itself: it hands the source and a
prepared namespace to an Executor. The default PythonExecutor runs Python
source in a fresh namespace whose builtins lack anything that reaches the
host (imports, files, eval). Other executors, e.g. a JavaScript engine
binding, can be plugged in through the same protocol.
"""

from __future__ import annotations

import builtins
import logging
from collections.abc import MutableMapping
from types import SimpleNamespace
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .errors import PathConflictError

logger = logging.getLogger(__name__)

# Names removed from the builtins visible to executed code.
BLOCKED_BUILTINS = frozenset({
    "__import__",
    "open",
    "eval",
    "exec",
    "compile",
    "input",
    "globals",
    "locals",
    "vars",
    "breakpoint",
    "exit",
    "quit",
    "help",
    "copyright",
    "credits",
    "license",
})


def safe_builtins() -> Dict[str, Any]:
    return {
        name: value
        for name, value in vars(builtins).items()
        if name not in BLOCKED_BUILTINS
    }


@runtime_checkable
class Executor(Protocol):
    """Runs `source` with `namespace` as its only global scope."""

    def execute(self, source: str, namespace: Dict[str, Any]) -> None:
        ...


class PythonExecutor:
    """
    Executes Python source with restricted builtins.

    Interpreter bookkeeping keys added for the run are removed afterwards,
    so the namespace only holds what the caller and the source put there.
    """

    def __init__(self, filename: str = "<template>"):
        self.filename = filename

    def execute(self, source: str, namespace: Dict[str, Any]) -> None:
        code = compile(source, self.filename, "exec", dont_inherit=True)

        injected = [key for key in ("__builtins__", "__name__") if key not in namespace]
        namespace.setdefault("__builtins__", safe_builtins())
        namespace.setdefault("__name__", "__template__")
        try:
            exec(code, namespace)
        finally:
            for key in injected:
                namespace.pop(key, None)


def safe_eval(
    source: str,
    context: Optional[Dict[str, Any]] = None,
    clone: bool = True,
    executor: Optional[Executor] = None,
) -> Dict[str, Any]:
    """
    Evaluates `source` in a clean environment that only sees `context`.

    The context is shallow-copied unless `clone` is False, in which case
    the executed code may modify the caller's mapping.

    Returns:
        The namespace after execution
    """
    if context is None:
        context = {}
    sandbox = dict(context) if clone else context

    (executor or PythonExecutor()).execute(source, sandbox)
    return sandbox


# ---- path aliases ----

def _is_container(value: Any) -> bool:
    if isinstance(value, MutableMapping):
        return True
    return hasattr(value, "__dict__") and not callable(value)


def _is_unset(value: Any) -> bool:
    # None, False, 0 and "" give way to a new namespace; other values block the path.
    return value is None or (isinstance(value, (bool, int, float, str)) and not value)


def _get(container: Any, key: str) -> Any:
    if isinstance(container, MutableMapping):
        return container.get(key)
    return getattr(container, key, None)


def _set(container: Any, key: str, value: Any) -> None:
    if isinstance(container, MutableMapping):
        container[key] = value
    else:
        setattr(container, key, value)


def define_path(root: Any, obj: Any, path: str) -> None:
    """
    Makes `obj` reachable as root.<path>.

    define_path({}, True, "foo.bar") leaves {"foo": namespace(bar=True)}.
    Existing containers along the path are reused. Missing segments, and
    segments holding None, False, 0 or "", become attribute namespaces so
    executed code can use dotted access.

    Raises:
        PathConflictError: An intermediate segment holds a non-container value
    """
    if not path:
        return

    parts = path.split(".")
    current = root
    for i, segment in enumerate(parts):
        if i == len(parts) - 1:
            _set(current, segment, obj)
            break

        existing = _get(current, segment)
        if _is_unset(existing):
            existing = SimpleNamespace()
            _set(current, segment, existing)
        elif not _is_container(existing):
            raise PathConflictError(path, segment)
        current = existing

    logger.debug("Defined alias path %s", path)


__all__ = [
    "Executor",
    "PythonExecutor",
    "safe_eval",
    "safe_builtins",
    "define_path",
    "BLOCKED_BUILTINS",
]
