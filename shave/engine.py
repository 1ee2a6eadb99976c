"""
Entry points of the decompiler.

    source ──execute──▶ registered template ──load──▶ node tree ──render──▶ text

Each call builds its own environment, document and tree; nothing is cached
or shared between calls. A failing call raises and returns no partial text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .config import DecompileOptions
from .environment import EnvironmentBuilder, TemplateCapture
from .loader import TemplateFormat, load_template
from .sandbox import Executor, safe_eval

logger = logging.getLogger(__name__)

OptionsLike = Union[DecompileOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class DecompileResult:
    revision: str
    format: TemplateFormat
    template: str


def _options(options: OptionsLike) -> DecompileOptions:
    if isinstance(options, DecompileOptions):
        return options
    return DecompileOptions.from_mapping(options)


def execute_registration(
    source: str,
    options: OptionsLike = None,
    executor: Optional[Executor] = None,
) -> Any:
    """
    Runs `source` and returns the one template it registered.

    Raises:
        MissingRegistrationError: Nothing was registered
        DuplicateRegistrationError: More than one template was registered
    """
    opts = _options(options)
    capture = TemplateCapture()
    builder = EnvironmentBuilder(
        context=opts.context,
        require_ember_paths=opts.require_ember_paths,
        global_paths=opts.global_paths,
    )

    safe_eval(source, builder.build(capture), executor=executor)
    return capture.captured()


def decompile_artifact_result(artifact: Any, options: OptionsLike = None) -> DecompileResult:
    opts = _options(options)
    loaded = load_template(artifact)
    text = loaded.root.to_string(0, opts.render_options)
    return DecompileResult(revision=loaded.revision, format=loaded.format, template=text)


def decompile_artifact(artifact: Any, options: OptionsLike = None) -> str:
    """Decompiles an already registered template object."""
    return decompile_artifact_result(artifact, options).template


def run_decompile(
    source: str,
    options: OptionsLike = None,
    executor: Optional[Executor] = None,
) -> DecompileResult:
    opts = _options(options)
    artifact = execute_registration(source, opts, executor)
    result = decompile_artifact_result(artifact, opts)
    logger.debug("Decompiled %s template (%d chars)", result.revision, len(result.template))
    return result


def decompile(
    source: str,
    options: OptionsLike = None,
    executor: Optional[Executor] = None,
) -> str:
    """
    Converts compiled template source back into readable template source.

    Args:
        source: Code that registers one template via Ember.HTMLBars.template(...)
        options: DecompileOptions or a mapping with context, requireEmberPaths,
                 globalPaths and indent (snake_case names work too)
        executor: Runs the source; PythonExecutor by default

    Returns:
        The decompiled template text
    """
    return run_decompile(source, options, executor).template


__all__ = [
    "DecompileResult",
    "decompile",
    "decompile_artifact",
    "decompile_artifact_result",
    "execute_registration",
    "run_decompile",
]
