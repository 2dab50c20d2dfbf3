"""Per-kind action compilers, rule constants and the bootstrap regenerator."""

from .alias import AliasCompiler
from .base import ModuleCompiler
from .bootstrap import Bootstrap, resolve_executable
from .clean import CleanCompiler
from .cmake import CMakeCompiler
from .copy import CopyCompiler
from .gn import GnCompiler
from .install import InstallCompiler
from .make import MakeCompiler, NinjaCompiler
from .plan import BuildPlan
from .script import ScriptCompiler

BUILTIN_COMPILERS: tuple[type[ModuleCompiler], ...] = (
    AliasCompiler,
    CleanCompiler,
    CMakeCompiler,
    CopyCompiler,
    GnCompiler,
    InstallCompiler,
    MakeCompiler,
    NinjaCompiler,
    ScriptCompiler,
)

__all__ = [
    "AliasCompiler",
    "BUILTIN_COMPILERS",
    "Bootstrap",
    "BuildPlan",
    "CleanCompiler",
    "CMakeCompiler",
    "CopyCompiler",
    "GnCompiler",
    "InstallCompiler",
    "MakeCompiler",
    "ModuleCompiler",
    "NinjaCompiler",
    "ScriptCompiler",
    "resolve_executable",
]
