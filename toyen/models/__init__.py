"""
toyen data models.

Module declarations with their per-kind property schemas, and the build
actions modules compile into.
"""

from .action import PHONY, BuildAction, Rule
from .module import (
    AliasProperties,
    CleanProperties,
    CMakeProperties,
    CopyProperties,
    GnProperties,
    InstallProperties,
    MakeProperties,
    Module,
    ModuleKind,
    ModuleProperties,
    NinjaProperties,
    ScriptProperties,
)

__all__ = [
    # Actions
    "PHONY",
    "BuildAction",
    "Rule",
    # Modules
    "AliasProperties",
    "CleanProperties",
    "CMakeProperties",
    "CopyProperties",
    "GnProperties",
    "InstallProperties",
    "MakeProperties",
    "Module",
    "ModuleKind",
    "ModuleProperties",
    "NinjaProperties",
    "ScriptProperties",
]
