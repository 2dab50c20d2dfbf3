"""
Dependency graph over module instances.

Nodes are modules, edges are the names listed in each module's
``dependencies``. Queries return ordered lists so results never depend on
dict or set iteration order.
"""

from __future__ import annotations

from typing import Iterator

from .core.exceptions import (
    CollectedErrors,
    CycleError,
    DuplicateNameError,
    ToyenError,
    UnresolvedDependencyError,
)
from .core.logging import get_logger
from .models.module import Module

logger = get_logger(__name__)

_UNVISITED, _ACTIVE, _DONE = 0, 1, 2


class DependencyGraph:
    """All declared modules and the dependency edges between them."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._resolved = False

    def add_module(self, module: Module) -> None:
        """Add a module.

        Raises:
            DuplicateNameError: If a module with the same name exists.
        """
        existing = self._modules.get(module.name)
        if existing is not None:
            where = f" (first declared in {existing.source})" if existing.source else ""
            raise DuplicateNameError(
                message=f"module name '{module.name}' is declared more than once{where}",
                name=module.name,
            )
        self._modules[module.name] = module
        self._resolved = False

    def get(self, name: str) -> Module:
        return self._modules[name]

    def modules(self) -> list[Module]:
        """All modules in insertion (declaration) order."""
        return list(self._modules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules())

    def _direct(self, module: Module) -> list[Module]:
        seen: set[str] = set()
        deps: list[Module] = []
        for name in module.dependencies:
            if name in seen or name not in self._modules:
                continue
            seen.add(name)
            deps.append(self._modules[name])
        return deps

    def resolve(self) -> None:
        """Check that every dependency exists and that there are no cycles.

        All problems are collected before raising.

        Raises:
            CollectedErrors: Holding every UnresolvedDependencyError and
                CycleError found.
        """
        errors: list[ToyenError] = []

        for module in self._modules.values():
            for name in module.dependencies:
                if name not in self._modules:
                    errors.append(
                        UnresolvedDependencyError(
                            message=f"module '{module.name}' depends on undefined module '{name}'",
                            from_module=module.name,
                            missing=name,
                        )
                    )

        errors.extend(self._find_cycles())

        if errors:
            raise CollectedErrors(message="dependency resolution failed", errors=errors)

        self._resolved = True
        logger.debug("Resolved dependency graph", modules=len(self._modules))

    def _find_cycles(self) -> list[CycleError]:
        state = {name: _UNVISITED for name in self._modules}
        cycles: list[CycleError] = []

        # Iterative DFS; each stack entry is (module, iterator over its deps).
        for root in self._modules.values():
            if state[root.name] != _UNVISITED:
                continue
            path: list[str] = [root.name]
            stack = [(root, iter(self._direct(root)))]
            state[root.name] = _ACTIVE
            while stack:
                module, deps = stack[-1]
                dep = next(deps, None)
                if dep is None:
                    state[module.name] = _DONE
                    stack.pop()
                    path.pop()
                elif state[dep.name] == _ACTIVE:
                    cycle = path[path.index(dep.name):] + [dep.name]
                    cycles.append(
                        CycleError(message="dependency cycle detected", cycle=cycle)
                    )
                elif state[dep.name] == _UNVISITED:
                    state[dep.name] = _ACTIVE
                    path.append(dep.name)
                    stack.append((dep, iter(self._direct(dep))))
        return cycles

    def direct_dependency_targets(self, module: Module | str) -> list[str]:
        """Target names of a module's direct dependencies, in declaration order."""
        module = self._lookup(module)
        return [dep.target_name for dep in self._direct(module)]

    def transitive_dependency_targets(self, module: Module | str) -> list[str]:
        """Target names of every module reachable from ``module``.

        Depth-first, each module listed once, in order of first discovery.
        The module itself is not included.
        """
        module = self._lookup(module)
        visited: set[str] = {module.name}
        order: list[str] = []
        stack = list(reversed(self._direct(module)))
        while stack:
            dep = stack.pop()
            if dep.name in visited:
                continue
            visited.add(dep.name)
            order.append(dep.target_name)
            stack.extend(reversed(self._direct(dep)))
        return order

    def _lookup(self, module: Module | str) -> Module:
        name = module if isinstance(module, str) else module.name
        if not self._resolved:
            raise RuntimeError("dependency graph must be resolved before it is queried")
        return self._modules[name]
