"""Alias modules: a phony name grouping other targets."""

from __future__ import annotations

from ..models.action import PHONY, BuildAction
from ..models.module import AliasProperties, Module, ModuleKind
from .base import ModuleCompiler


class AliasCompiler(ModuleCompiler[AliasProperties]):
    kind = ModuleKind.ALIAS
    properties_model = AliasProperties

    def build_actions(self, module: Module, props: AliasProperties, dep_targets: list[str]) -> list[BuildAction]:
        return [BuildAction(rule=PHONY, outputs=[module.name], inputs=dep_targets)]
