"""
Exceptions raised by the decompiler.

All expected failures (a malformed artifact, an unsupported revision,
a broken registration contract) inherit from ShaveError and are shown
to the user as clean messages without stack traces.

Programming errors and bugs should NOT inherit from ShaveError:
they propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Any, Optional


class ShaveError(Exception):
    """Base class for all user-facing decompilation errors."""
    pass


class InvalidArtifactError(ShaveError):
    """The artifact does not expose a required member with the required shape."""

    def __init__(self, message: str, member: Optional[str] = None):
        self.member = member
        super().__init__(message)


class UnsupportedVersionError(ShaveError):
    """The artifact declares a revision this decompiler does not handle."""

    def __init__(self, message: str, revision: Optional[str] = None):
        self.revision = revision
        super().__init__(message)


class UnknownOpcodeError(ShaveError):
    """A statement or expression array starts with an unrecognized tag."""

    def __init__(self, kind: str, opcode: Any):
        self.kind = kind
        self.opcode = opcode
        super().__init__(f"Invalid {kind} '{opcode}'")


class ShapeError(ShaveError):
    """A hook argument, statement argument or node path has the wrong shape."""
    pass


class StructuralMismatchError(ShaveError):
    """buildRenderNodes() and statements disagree on the number of morphs."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid result from buildRenderNodes(): "
            f"{actual} morphs for {expected} statements"
        )


class MissingRegistrationError(ShaveError):
    """The executed source never registered a template."""
    pass


class DuplicateRegistrationError(ShaveError):
    """The executed source registered more than one template."""
    pass


class PathConflictError(ShaveError, TypeError):
    """An alias path runs through an existing value that is not a container."""

    def __init__(self, path: str, segment: str):
        self.path = path
        self.segment = segment
        super().__init__(
            f"Cannot create path '{path}': '{segment}' is already taken by a non-object"
        )


class ConfigError(ShaveError, ValueError):
    """Decompile options could not be read or validated."""

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.path = path
        prefix = f"{'.'.join(path)}: " if path else ""
        super().__init__(prefix + message)


__all__ = [
    "ShaveError",
    "InvalidArtifactError",
    "UnsupportedVersionError",
    "UnknownOpcodeError",
    "ShapeError",
    "StructuralMismatchError",
    "MissingRegistrationError",
    "DuplicateRegistrationError",
    "PathConflictError",
    "ConfigError",
]
