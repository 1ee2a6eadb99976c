"""
Shave: turns compiled HTMLBars templates back into template source.
"""

from .config import DecompileOptions, load_options
from .engine import decompile, decompile_artifact, run_decompile
from .errors import (
    ConfigError,
    DuplicateRegistrationError,
    InvalidArtifactError,
    MissingRegistrationError,
    PathConflictError,
    ShapeError,
    ShaveError,
    StructuralMismatchError,
    UnknownOpcodeError,
    UnsupportedVersionError,
)
from .rendering import RenderOptions
from .sandbox import Executor, PythonExecutor

__all__ = [
    "decompile",
    "decompile_artifact",
    "run_decompile",
    "DecompileOptions",
    "RenderOptions",
    "load_options",
    "Executor",
    "PythonExecutor",
    "ShaveError",
    "ConfigError",
    "DuplicateRegistrationError",
    "InvalidArtifactError",
    "MissingRegistrationError",
    "PathConflictError",
    "ShapeError",
    "StructuralMismatchError",
    "UnknownOpcodeError",
    "UnsupportedVersionError",
]
