"""
Execution environment for template-registering code.

Compiled templates are wrapped in code that hands the template object to
Ember.HTMLBars.template(...). The builder below prepares the names that
code expects (a fake Ember, require, module) and captures the single
template it registers.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Dict, Iterable, Optional

from .errors import DuplicateRegistrationError, MissingRegistrationError, UnsupportedVersionError
from .sandbox import define_path

logger = logging.getLogger(__name__)

_UNSET = object()


class TemplateCapture:
    """Holds the one template registered during an execution."""

    def __init__(self):
        self._template: Any = _UNSET

    @property
    def registered(self) -> bool:
        return self._template is not _UNSET

    def register(self, template: Any) -> Any:
        if self.registered:
            raise DuplicateRegistrationError("Ember.HTMLBars.template called repeatedly.")
        logger.debug("Template registered: %s", type(template).__name__)
        self._template = template
        return template

    def captured(self) -> Any:
        if not self.registered:
            raise MissingRegistrationError("Ember.HTMLBars.template not invoked.")
        return self._template


def _legacy_template(*args: Any, **kwargs: Any) -> Any:
    raise UnsupportedVersionError("Ember versions older than 1.10 are not supported.")


def make_fake_ember(capture: TemplateCapture) -> SimpleNamespace:
    """The registration surface: Ember.HTMLBars.template and Ember.Handlebars.template."""
    return SimpleNamespace(
        HTMLBars=SimpleNamespace(template=capture.register),
        Handlebars=SimpleNamespace(template=_legacy_template),
    )


class EnvironmentBuilder:
    """
    Builds the global namespace for one execution.

    - require(...) returns a copy of the fake Ember, additionally reachable
      at every path in `require_ember_paths`
    - module is an empty attribute namespace
    - `context` entries are shallow-copied in and may shadow the above
    - the fake Ember is defined at every path in `global_paths`
    """

    def __init__(
        self,
        context: Optional[Dict[str, Any]] = None,
        require_ember_paths: Iterable[str] = (),
        global_paths: Iterable[str] = (),
    ):
        self.context = dict(context or {})
        self.require_ember_paths = list(require_ember_paths)
        self.global_paths = list(global_paths)

    def build(self, capture: TemplateCapture) -> Dict[str, Any]:
        ember = make_fake_ember(capture)

        require_result = SimpleNamespace(**vars(ember))
        for path in self.require_ember_paths:
            define_path(require_result, ember, path)

        def require(*args: Any, **kwargs: Any) -> SimpleNamespace:
            return require_result

        namespace: Dict[str, Any] = {
            "require": require,
            "module": SimpleNamespace(),
        }
        namespace.update(self.context)
        for path in self.global_paths:
            define_path(namespace, ember, path)

        return namespace


__all__ = ["TemplateCapture", "EnvironmentBuilder", "make_fake_ember"]
