"""
Artifact loader: the one place that branches on the template revision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .dom import Node
from .errors import InvalidArtifactError, UnsupportedVersionError
from .formats import decompile_hook_template, decompile_opcode_template
from .formats.artifact import find_revision, major_version

logger = logging.getLogger(__name__)


class TemplateFormat(Enum):
    """Compiled template encodings, named after the protocol they follow."""
    HOOKS = "hooks"      # Ember 1.x: render() calls hooks
    OPCODES = "opcodes"  # Ember 2.x: declarative statement arrays


_FORMATS_BY_MAJOR = {
    1: TemplateFormat.HOOKS,
    2: TemplateFormat.OPCODES,
}


@dataclass(frozen=True)
class LoadedTemplate:
    """Result of decompiling one registered template."""
    revision: str
    format: TemplateFormat
    root: Node


def detect_format(artifact: Any) -> tuple[str, TemplateFormat]:
    """
    Determines the encoding of a registered template from its revision marker.

    Raises:
        InvalidArtifactError: The artifact carries no revision at all
        UnsupportedVersionError: The revision names an unknown major version
    """
    revision = find_revision(artifact)
    if not revision:
        raise InvalidArtifactError("Invalid template: revision missing.", member="revision")

    major = major_version(revision)
    template_format = _FORMATS_BY_MAJOR.get(major) if major is not None else None
    if template_format is None:
        raise UnsupportedVersionError(
            f"Unsupported HTMLBars/Ember version: {revision}", revision=revision
        )

    logger.debug("Template revision %s -> %s protocol", revision, template_format.value)
    return revision, template_format


def load_template(artifact: Any) -> LoadedTemplate:
    """Detects the encoding and runs the matching interpreter."""
    revision, template_format = detect_format(artifact)

    if template_format == TemplateFormat.HOOKS:
        root = decompile_hook_template(artifact)
    elif template_format == TemplateFormat.OPCODES:
        root = decompile_opcode_template(artifact)
    else:
        raise UnsupportedVersionError(
            f"Unsupported HTMLBars/Ember version: {revision}", revision=revision
        )

    return LoadedTemplate(revision=revision, format=template_format, root=root)


__all__ = ["TemplateFormat", "LoadedTemplate", "detect_format", "load_template"]
