"""
Decompile options and their loading from YAML option files.

Options may be written in snake_case or in the camelCase spelling used by
JavaScript callers:

    context:
      ENV: production
    globalPaths: [Ember]
    requireEmberPaths: [default.Ember]
    indent: 2
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .rendering import DEFAULT_INDENT, RenderOptions

_yaml = YAML(typ="safe")

# accepted spelling -> field name
_KEY_ALIASES: Dict[str, str] = {
    "context": "context",
    "require_ember_paths": "require_ember_paths",
    "requireEmberPaths": "require_ember_paths",
    "requireEmberPathAliases": "require_ember_paths",
    "global_paths": "global_paths",
    "globalPaths": "global_paths",
    "globalPathAliases": "global_paths",
    "indent": "indent",
}


@dataclass(frozen=True)
class DecompileOptions:
    # extra globals for the executed code (copied, never mutated)
    context: Dict[str, Any] = field(default_factory=dict)
    # require(...).<path> also resolves to the fake Ember
    require_ember_paths: List[str] = field(default_factory=list)
    # <path> is a pre-existing global holding the fake Ember
    global_paths: List[str] = field(default_factory=list)
    # spaces per nesting level in the output
    indent: int = DEFAULT_INDENT

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(indent=self.indent)

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "DecompileOptions":
        """
        Builds options from a plain mapping.

        Raises:
            ConfigError: Unknown keys, duplicate spellings or wrong value types
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigError(f"expected mapping, got {type(raw).__name__}")

        kwargs: Dict[str, Any] = {}
        for key, value in raw.items():
            name = _KEY_ALIASES.get(str(key))
            if name is None:
                raise ConfigError(f"unexpected key {key!r}", (str(key),))
            if name in kwargs:
                raise ConfigError(f"option given twice (as {key!r})", (str(key),))
            kwargs[name] = _coerce(name, value, (str(key),))

        return cls(**kwargs)

    def merged(self, **overrides: Any) -> "DecompileOptions":
        """Copy with every non-None override applied (list overrides extend)."""
        changes: Dict[str, Any] = {}
        for name, value in overrides.items():
            if value is None:
                continue
            if name in ("require_ember_paths", "global_paths"):
                changes[name] = [*getattr(self, name), *value]
            elif name == "context":
                changes[name] = {**self.context, **value}
            else:
                changes[name] = value
        return replace(self, **changes)


def _coerce(name: str, value: Any, path: tuple[str, ...]) -> Any:
    if name == "context":
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigError(f"expected mapping, got {type(value).__name__}", path)
        return {str(k): v for k, v in value.items()}

    if name in ("require_ember_paths", "global_paths"):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"expected list of paths, got {type(value).__name__}", path)
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ConfigError(f"expected str, got {type(item).__name__}", (*path, str(i)))
        return list(value)

    if name == "indent":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"expected int, got {type(value).__name__}", path)
        if value < 0:
            raise ConfigError(f"must not be negative, got {value}", path)
        return value

    return value


def load_options(path: Path) -> DecompileOptions:
    """
    Reads decompile options from a YAML file. An empty file yields defaults.

    Raises:
        ConfigError: Unreadable file, invalid YAML or invalid options
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read options file {path}: {e}") from e

    try:
        raw = _yaml.load(text)
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return DecompileOptions()
    if not isinstance(raw, dict):
        raise ConfigError(f"{path.name} must be a mapping of options, got {type(raw).__name__}")
    return DecompileOptions.from_mapping(raw)


__all__ = ["DecompileOptions", "load_options"]
