"""Domain layer: errors, schemas and constants."""

from .errors import (
    ConfigError,
    ConflictError,
    ErrorCodes,
    LoaderError,
    ParseError,
    PreconditionError,
    TraversalError,
)
from .schemas import (
    Classification,
    FileState,
    LoaderState,
    ReloadResult,
    ScanMode,
    TrackedFile,
    WalkEntry,
)

__all__ = [
    # errors
    "LoaderError",
    "ConflictError",
    "TraversalError",
    "ParseError",
    "PreconditionError",
    "ConfigError",
    "ErrorCodes",
    # schemas
    "ScanMode",
    "FileState",
    "LoaderState",
    "WalkEntry",
    "TrackedFile",
    "Classification",
    "ReloadResult",
]
