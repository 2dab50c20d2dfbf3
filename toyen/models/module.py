"""
Module declaration models.

A module is one declared build step. Its kind selects the compilation policy
and the pydantic model its raw properties are decoded into.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# A file or directory path; empty strings would produce malformed build lines.
PathStr = Annotated[str, Field(min_length=1)]

# Values reach Ninja unescaped, so a shell "$VAR" must be written "$$VAR".
ENV_DESCRIPTION = "VAR=value assignments; write a literal $ as $$"


class ModuleKind(str, Enum):
    """The closed set of module kinds toyen knows how to compile."""

    ALIAS = "alias"
    CLEAN = "clean"
    CMAKE = "cmake"
    COPY = "copy"
    GN = "gn"
    INSTALL = "install"
    MAKE = "make"
    NINJA = "ninja"
    SCRIPT = "script"


class ModuleProperties(BaseModel):
    """Base for per-kind property schemas.

    Unknown keys are rejected. Keys may be written either in snake_case or in
    camelCase (``build_dir`` or ``buildDir``).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AliasProperties(ModuleProperties):
    """An alias only groups its dependencies."""


class CleanProperties(ModuleProperties):
    dirs: list[PathStr] = Field(default_factory=list, description="Directories to remove")


class CMakeProperties(ModuleProperties):
    src: PathStr = Field(description="Directory holding the top CMakeLists.txt")
    build_dir: PathStr = Field(description="Directory CMake generates into")
    env: list[str] = Field(default_factory=list, description=ENV_DESCRIPTION)
    options: list[str] = Field(default_factory=list, description="Cache entries, passed as -D<opt>")


class CopyProperties(ModuleProperties):
    sources: list[PathStr] = Field(min_length=1, description="Files to copy")
    destination: PathStr = Field(description="Target file, or directory when several sources")


class GnProperties(ModuleProperties):
    src_dir: PathStr = Field(description="GN root directory")
    build_dir: PathStr = Field(description="Directory GN generates into")
    env: list[str] = Field(default_factory=list, description=ENV_DESCRIPTION)
    args: list[str] = Field(default_factory=list, description="Build arguments, passed to --args")


class InstallProperties(ModuleProperties):
    sources: list[PathStr] = Field(min_length=1, description="Files to install")
    destination: PathStr = Field(description="Directory to install into")


class MakeProperties(ModuleProperties):
    makefile: PathStr = Field(description="Path of the Makefile to run")
    env: list[str] = Field(default_factory=list, description=ENV_DESCRIPTION)
    targets: list[str] = Field(default_factory=list, description="Make goals, all when empty")
    outputs: list[PathStr] = Field(default_factory=list, description="Files the sub-build produces")


class NinjaProperties(ModuleProperties):
    ninja_file: PathStr = Field(description="Path of the Ninja file to run")
    env: list[str] = Field(default_factory=list, description=ENV_DESCRIPTION)
    targets: list[str] = Field(default_factory=list)
    outputs: list[PathStr] = Field(default_factory=list)


class ScriptProperties(ModuleProperties):
    script: PathStr = Field(description="Script to run, also its primary input")
    working_dir: PathStr = Field(description="Directory the script runs in")
    args: list[str] = Field(default_factory=list)
    env: list[str] = Field(default_factory=list, description=ENV_DESCRIPTION)
    inputs: list[PathStr] = Field(default_factory=list, description="Extra files the script reads")
    outputs: list[PathStr] = Field(default_factory=list, description="Files the script writes")
    gen_files: list[PathStr] = Field(default_factory=list, description="Generated files, treated as outputs")


@dataclass
class Module:
    """A module instance, created once from its declaration.

    Everything but ``compiled_target_name`` is fixed after creation; the
    compiler for the module's kind sets that field.
    """

    kind: ModuleKind
    name: str
    properties: ModuleProperties
    dependencies: list[str] = field(default_factory=list)
    source: str = ""
    compiled_target_name: str | None = None

    @property
    def target_name(self) -> str:
        """Name other modules use to depend on this one."""
        return self.compiled_target_name or self.name
