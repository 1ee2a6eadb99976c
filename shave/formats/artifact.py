"""
Uniform member access for compiled templates.

Executed sources may register a plain mapping or an object with attributes;
the interpreters look members up through these helpers only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

# "Ember@1.12.2", "Ember@2.6.0+4eb55108"
REVISION_PATTERN = re.compile(r"Ember@(\d+)")


def member(artifact: Any, name: str, default: Any = None) -> Any:
    """Returns artifact[name] for mappings, getattr(artifact, name) otherwise."""
    if artifact is None:
        return default
    if isinstance(artifact, Mapping):
        return artifact.get(name, default)
    return getattr(artifact, name, default)


def find_revision(artifact: Any) -> Optional[str]:
    """
    Revision marker of a template: `revision` for hook-protocol templates,
    `meta.revision` for opcode-protocol ones.
    """
    revision = member(artifact, "revision")
    if revision:
        return str(revision)
    revision = member(member(artifact, "meta"), "revision")
    if revision:
        return str(revision)
    return None


def major_version(revision: str) -> Optional[int]:
    """Major version encoded in a revision marker, None when it does not match."""
    m = REVISION_PATTERN.search(revision)
    return int(m.group(1)) if m else None


__all__ = ["REVISION_PATTERN", "member", "find_revision", "major_version"]
