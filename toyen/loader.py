"""
Declaration file loader.

Declaration files are YAML documents::

    subdirs:
      - third_party/*
    modules:
      - kind: copy
        name: headers
        deps: [codegen]
        sources: [include/a.h, include/b.h]
        destination: out/include

``subdirs`` entries are globs relative to the declaring file; every matching
directory holding a file with the same basename is loaded as well. Every
file read is recorded, since all of them belong in the depfile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.exceptions import DeclarationError, ToyenError
from .core.logging import get_logger

logger = get_logger(__name__)

_RESERVED_KEYS = ("kind", "name", "deps")


@dataclass
class Declaration:
    """One module as written in a declaration file, not yet validated."""

    kind: str
    name: str
    properties: dict[str, Any]
    dependencies: list[str]
    source: str


@dataclass
class LoadResult:
    declarations: list[Declaration] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    errors: list[ToyenError] = field(default_factory=list)


class DeclarationLoader:
    """Reads a root declaration file and everything it includes."""

    def __init__(self) -> None:
        self._result = LoadResult()
        self._seen: set[Path] = set()

    def load(self, root_file: Path) -> LoadResult:
        """Load declarations starting at ``root_file``.

        Errors do not stop loading; they are collected in the result so every
        problem can be reported in one run.
        """
        self._load_file(root_file.resolve())
        logger.info(
            "Loaded declarations",
            files=len(self._result.files),
            modules=len(self._result.declarations),
            errors=len(self._result.errors),
        )
        return self._result

    def _error(self, path: Path, message: str, cause: Exception | None = None) -> None:
        self._result.errors.append(DeclarationError(message=message, path=str(path), cause=cause))

    def _load_file(self, path: Path) -> None:
        if path in self._seen:
            return
        self._seen.add(path)

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            self._error(path, f"cannot read declaration file: {e.strerror or e}")
            return
        self._result.files.append(str(path))

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            self._error(path, f"invalid YAML: {e}")
            return

        if document is None:
            return
        if not isinstance(document, dict):
            self._error(path, "top level must be a mapping with 'modules' and 'subdirs'")
            return

        unknown = sorted(set(document) - {"modules", "subdirs"})
        if unknown:
            self._error(path, f"unknown top-level keys: {', '.join(map(str, unknown))}")

        modules = document.get("modules") or []
        if not isinstance(modules, list):
            self._error(path, "'modules' must be a list")
        else:
            for index, entry in enumerate(modules):
                self._parse_module(path, index, entry)

        subdirs = document.get("subdirs") or []
        if not isinstance(subdirs, list) or not all(isinstance(s, str) for s in subdirs):
            self._error(path, "'subdirs' must be a list of strings")
            return
        for pattern in subdirs:
            if not pattern or Path(pattern).is_absolute():
                self._error(path, f"subdirs pattern '{pattern}' must be a non-empty relative path")
                continue
            try:
                matches = sorted(p for p in path.parent.glob(pattern) if p.is_dir())
            except (ValueError, NotImplementedError) as e:
                self._error(path, f"invalid subdirs pattern '{pattern}': {e}", cause=e)
                continue
            if not matches:
                self._error(path, f"subdirs pattern '{pattern}' matches no directory")
            for directory in matches:
                child = directory / path.name
                if child.is_file():
                    self._load_file(child.resolve())

    def _parse_module(self, path: Path, index: int, entry: Any) -> None:
        where = f"modules[{index}]"
        if not isinstance(entry, dict):
            self._error(path, f"{where}: module declaration must be a mapping")
            return

        kind = entry.get("kind")
        name = entry.get("name")
        deps = entry.get("deps", [])
        problems = []
        if not isinstance(kind, str) or not kind:
            problems.append("'kind' must be a non-empty string")
        if not isinstance(name, str) or not name:
            problems.append("'name' must be a non-empty string")
        if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
            problems.append("'deps' must be a list of module names")
        if problems:
            self._error(path, f"{where}: {'; '.join(problems)}")
            return

        self._result.declarations.append(
            Declaration(
                kind=kind,
                name=name,
                properties={k: v for k, v in entry.items() if k not in _RESERVED_KEYS},
                dependencies=list(deps),
                source=str(path),
            )
        )


def load_declarations(root_file: Path) -> LoadResult:
    """Load every declaration reachable from ``root_file``."""
    return DeclarationLoader().load(root_file)
