"""
Module registry for mapping kind names to compilers.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import ValidationError

from .compiler import BUILTIN_COMPILERS
from .compiler.base import ModuleCompiler
from .core.config import Config
from .core.exceptions import DuplicateKindError, SchemaError, UnknownKindError
from .core.logging import get_logger
from .models.module import Module, ModuleKind

logger = get_logger(__name__)

CompilerFactory = Callable[[Config], ModuleCompiler]


def _format_validation_error(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<properties>"
        messages.append(f"{location}: {item['msg']}")
    return messages


class ModuleRegistry:
    """Registry binding module kind names to their compilers.

    Every compiler is created from its factory with the registry's shared
    Config, so all modules of one kind share one compiler.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self._compilers: dict[str, ModuleCompiler] = {}

    def register(self, kind: ModuleKind | str, factory: CompilerFactory) -> ModuleCompiler:
        """Register a compiler factory for a kind.

        Args:
            kind: The kind name declarations use.
            factory: Called with the shared Config, returns the compiler.

        Returns:
            The compiler created by the factory.

        Raises:
            DuplicateKindError: If the kind is already registered.
        """
        name = ModuleKind(kind).value
        if name in self._compilers:
            raise DuplicateKindError(message=f"Module kind '{name}' is already registered", kind=name)
        compiler = factory(self.config)
        self._compilers[name] = compiler
        return compiler

    def kinds(self) -> list[str]:
        """List all registered kind names, in registration order."""
        return list(self._compilers)

    def compiler_for(self, kind: ModuleKind | str) -> ModuleCompiler:
        """Get the compiler registered for a kind.

        Raises:
            UnknownKindError: If no compiler is registered for the kind.
        """
        key = kind.value if isinstance(kind, ModuleKind) else kind
        compiler = self._compilers.get(key)
        if compiler is None:
            available = ", ".join(self._compilers) or "<none>"
            raise UnknownKindError(
                message=f"Unknown module kind '{key}' (available: {available})",
                kind=key,
            )
        return compiler

    def instantiate(
        self,
        kind: str,
        name: str,
        raw_properties: dict[str, Any],
        dependencies: list[str] | None = None,
        source: str = "",
    ) -> Module:
        """Create a module, validating its properties against the kind's schema.

        Raises:
            UnknownKindError: If the kind was never registered.
            SchemaError: If the properties do not match the schema.
        """
        try:
            compiler = self.compiler_for(kind)
        except UnknownKindError as e:
            e.module = name
            raise

        try:
            properties = compiler.properties_model.model_validate(raw_properties)
        except ValidationError as e:
            raise SchemaError(
                message="invalid properties",
                module=name,
                kind=kind,
                errors=_format_validation_error(e),
                cause=e,
            ) from e

        return Module(
            kind=compiler.kind,
            name=name,
            properties=properties,
            dependencies=list(dependencies or []),
            source=source,
        )

    def __contains__(self, kind: object) -> bool:
        return kind in self._compilers


def create_registry(config: Config) -> ModuleRegistry:
    """Create a registry holding every built-in module kind."""
    registry = ModuleRegistry(config)
    for compiler_class in BUILTIN_COMPILERS:
        registry.register(compiler_class.kind, compiler_class)
    logger.debug("Registered module kinds", kinds=registry.kinds())
    return registry
