"""Clean modules: remove directories, or just chain other clean targets."""

from __future__ import annotations

from ..models.action import PHONY, BuildAction
from ..models.module import CleanProperties, Module, ModuleKind
from .base import ModuleCompiler, join_words
from .rules import RM


class CleanCompiler(ModuleCompiler[CleanProperties]):
    """Compile ``clean`` modules.

    Without directories the module still depends on its dependencies, so
    clean targets compose without deleting anything themselves. Directory
    names are joined verbatim; paths containing spaces are not supported.
    """

    kind = ModuleKind.CLEAN
    properties_model = CleanProperties

    def build_actions(self, module: Module, props: CleanProperties, dep_targets: list[str]) -> list[BuildAction]:
        if props.dirs:
            return [
                BuildAction(
                    rule=RM,
                    outputs=[module.name],
                    implicits=dep_targets,
                    args={"files": join_words(props.dirs)},
                )
            ]
        return [BuildAction(rule=PHONY, outputs=[module.name], implicits=dep_targets)]
