"""
Shared test infrastructure for the decompiler.

Modules:
- compiled: builders for hook-protocol and opcode-protocol templates
- cli_utils: running the CLI in a subprocess
- file_utils: writing fixture files
- fixture_sources: compiled sources in tests/fixtures and their expected text
"""

from .compiled import (
    EMBER1_REVISION,
    EMBER2_REVISION,
    PROTOCOLS,
    AttrAt,
    Case,
    ElementAt,
    MorphAt,
    comment,
    compile_case,
    element,
    fragment,
    hook_template,
    loc,
    opcode_template,
    text,
    to_hook_template,
    to_opcode_template,
    with_loc,
)
from .cli_utils import run_cli, jload
from .file_utils import write
from .fixture_sources import FIXTURES_DIR, GREETING, PROFILE, read_fixture

__all__ = [
    # Compiled template builders
    "EMBER1_REVISION", "EMBER2_REVISION", "PROTOCOLS",
    "AttrAt", "Case", "ElementAt", "MorphAt",
    "comment", "element", "fragment", "text",
    "compile_case", "hook_template", "opcode_template", "loc", "with_loc",
    "to_hook_template", "to_opcode_template",

    # CLI utilities
    "run_cli", "jload",

    # File utilities
    "write",

    # Compiled source fixtures
    "FIXTURES_DIR", "GREETING", "PROFILE", "read_fixture",
]
