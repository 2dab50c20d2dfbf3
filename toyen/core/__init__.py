"""Core infrastructure components for toyen."""

from .config import Config, Triple, default_host_triple, get_config
from .exceptions import (
    CollectedErrors,
    CycleError,
    DeclarationError,
    DuplicateKindError,
    DuplicateNameError,
    DuplicateOutputError,
    EmissionError,
    ExecutableNotFoundError,
    SchemaError,
    ToyenError,
    TripleError,
    UnknownKindError,
    UnresolvedDependencyError,
)
from .logging import get_logger, setup_logging
from .types import StageResult, StageStatus

__all__ = [
    "Config",
    "Triple",
    "default_host_triple",
    "get_config",
    "CollectedErrors",
    "CycleError",
    "DeclarationError",
    "DuplicateKindError",
    "DuplicateNameError",
    "DuplicateOutputError",
    "EmissionError",
    "ExecutableNotFoundError",
    "SchemaError",
    "ToyenError",
    "TripleError",
    "UnknownKindError",
    "UnresolvedDependencyError",
    "get_logger",
    "setup_logging",
    "StageResult",
    "StageStatus",
]
