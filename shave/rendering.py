"""
Rendering options threaded through every recursive to_string() call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_INDENT = 4


@dataclass(frozen=True)
class RenderOptions:
    indent: int = DEFAULT_INDENT  # spaces added per nesting level


def indent_step(options: Optional[RenderOptions]) -> int:
    """Indentation step; a missing or zero step falls back to the default."""
    if options is None or not options.indent:
        return DEFAULT_INDENT
    return options.indent


def pad(indent: int) -> str:
    return " " * indent


__all__ = ["RenderOptions", "DEFAULT_INDENT", "indent_step", "pad"]
