"""
Interpreters for the two compiled template encodings.

- hook_protocol: templates that call named hooks from render() (Ember 1.x)
- opcode_protocol: templates that declare statement arrays (Ember 2.x)
"""

from .hook_protocol import decompile_hook_template
from .opcode_protocol import decompile_opcode_template, validate_opcode_template

__all__ = [
    "decompile_hook_template",
    "decompile_opcode_template",
    "validate_opcode_template",
]
