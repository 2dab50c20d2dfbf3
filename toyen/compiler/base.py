"""
Base module compiler abstraction.

Each module kind has one ModuleCompiler subclass. A compiler is bound to the
shared Config when the kind is registered and turns one module plus the
target names of its direct dependencies into build actions. Compilers never
look at other modules.
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar, cast

from ..core.config import Config
from ..core.logging import get_logger
from ..models.action import BuildAction
from ..models.module import Module, ModuleKind, ModuleProperties
from .rules import MKDIR

logger = get_logger(__name__)

PropsT = TypeVar("PropsT", bound=ModuleProperties)


class ModuleCompiler(ABC, Generic[PropsT]):
    """Base class for all per-kind compilation policies."""

    kind: ClassVar[ModuleKind]
    properties_model: ClassVar[type[ModuleProperties]]

    def __init__(self, config: Config) -> None:
        """Initialize the compiler.

        Args:
            config: Shared, read-only build configuration.
        """
        self.config = config

    def compile(self, module: Module, dep_targets: list[str]) -> list[BuildAction]:
        """Compile a module into build actions.

        Sets the module's compiled target name, which for every kind is the
        module name, so dependents can always refer to it.

        Args:
            module: The module to compile; must be of this compiler's kind.
            dep_targets: Target names of the module's direct dependencies,
                in declaration order.

        Returns:
            The module's build actions, in emission order.
        """
        if module.kind != self.kind:
            raise ValueError(f"{type(self).__name__} cannot compile {module.kind.value} module '{module.name}'")

        module.compiled_target_name = module.name
        actions = self.build_actions(module, cast(PropsT, module.properties), list(dep_targets))
        logger.debug(
            "Compiled module",
            module=module.name,
            kind=self.kind.value,
            actions=len(actions),
        )
        return actions

    @abstractmethod
    def build_actions(self, module: Module, props: PropsT, dep_targets: list[str]) -> list[BuildAction]:
        """Produce the build actions for one module of this kind."""
        ...


def mkdir_action(directory: str) -> BuildAction:
    """Create ``directory`` if missing; optional, so never built by default."""
    return BuildAction(rule=MKDIR, outputs=[directory], optional=True)


def normalize_dir(path: str) -> str:
    """Normalize a directory path so equal directories compare equal."""
    return posixpath.normpath(path)


def join_words(words: list[str]) -> str:
    """Space-join values verbatim; no quoting is attempted."""
    return " ".join(words)
