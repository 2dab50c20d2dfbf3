"""Emission of compiled build plans: Ninja text, depfiles and where they are written."""

from .interface import EmissionBackend
from .local import LocalEmissionBackend, MemoryEmissionBackend
from .ninja import render_build_file, render_depfile

__all__ = [
    "EmissionBackend",
    "LocalEmissionBackend",
    "MemoryEmissionBackend",
    "render_build_file",
    "render_depfile",
]
