"""
Custom exception hierarchy for toyen.

All exceptions inherit from ToyenError so that the pipeline and the CLI can
report every failure the same way. Each exception type carries the names
involved so diagnostics can point at the offending module or file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class ToyenError(Exception):
    """Base exception for all toyen errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class DeclarationError(ToyenError):
    """Raised when a declaration file cannot be read or has the wrong shape."""

    path: str = ""

    def __str__(self) -> str:
        return f"{self.path}: {super().__str__()}" if self.path else super().__str__()


@dataclass
class UnknownKindError(ToyenError):
    """Raised when a module declares a kind nobody registered."""

    kind: str = ""
    module: str = ""


@dataclass
class DuplicateKindError(ToyenError):
    """Raised when two factories are registered under one kind name.

    This happens while the registry is assembled at startup, so it is
    always fatal.
    """

    kind: str = ""


@dataclass
class SchemaError(ToyenError):
    """Raised when module properties do not match the kind's schema."""

    module: str = ""
    kind: str = ""
    errors: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        details = "; ".join(self.errors)
        base = f"module '{self.module}' ({self.kind}): {self.message}"
        return f"{base}: {details}" if details else base


@dataclass
class DuplicateNameError(ToyenError):
    """Raised when two modules share a target name."""

    name: str = ""


@dataclass
class UnresolvedDependencyError(ToyenError):
    """Raised when a module depends on a name that is not declared."""

    from_module: str = ""
    missing: str = ""


@dataclass
class CycleError(ToyenError):
    """Raised when the dependency relation contains a cycle."""

    cycle: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.message}: {' -> '.join(self.cycle)}"


@dataclass
class DuplicateOutputError(ToyenError):
    """Raised when two different build actions claim the same output path."""

    output: str = ""
    modules: list[str] = field(default_factory=list)


@dataclass
class EmissionError(ToyenError):
    """Raised when the build file or the depfile cannot be written."""

    path: str = ""


@dataclass
class TripleError(ToyenError):
    """Raised when a non-empty platform triple cannot be decomposed."""

    triple: str = ""


@dataclass
class ExecutableNotFoundError(ToyenError):
    """Raised when the running executable cannot be located.

    The regeneration rule re-invokes toyen itself, so without its path the
    build file could never keep itself up to date.
    """

    executable: str = ""

    def __str__(self) -> str:
        return f"{self.message}: '{self.executable}'"


@dataclass
class CollectedErrors(ToyenError):
    """Several errors found by one phase, reported together."""

    errors: list[ToyenError] = field(default_factory=list)

    def __iter__(self) -> Iterator[ToyenError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        lines = [self.message] + [f"  {err}" for err in self.errors]
        return "\n".join(lines)
