"""Make and Ninja modules: run a sub-build with an external driver."""

from __future__ import annotations

import posixpath

from ..models.action import BuildAction, Rule
from ..models.module import MakeProperties, Module, ModuleKind, NinjaProperties
from .base import ModuleCompiler, join_words
from .rules import MAKE, NINJA


def _sub_build(
    module: Module,
    rule: Rule,
    prefix: str,
    build_file: str,
    env: list[str],
    targets: list[str],
    outputs: list[str],
    dep_targets: list[str],
) -> BuildAction:
    args = {
        "envVars": join_words(env),
        f"{prefix}File": posixpath.basename(build_file),
        f"{prefix}Dir": posixpath.dirname(build_file) or ".",
    }
    if targets:
        args["targets"] = join_words(targets)

    return BuildAction(
        rule=rule,
        outputs=list(outputs) if outputs else [module.name],
        implicits=[*dep_targets, build_file],
        args=args,
        optional=True,
    )


class MakeCompiler(ModuleCompiler[MakeProperties]):
    kind = ModuleKind.MAKE
    properties_model = MakeProperties

    def build_actions(self, module: Module, props: MakeProperties, dep_targets: list[str]) -> list[BuildAction]:
        return [
            _sub_build(module, MAKE, "make", props.makefile, props.env, props.targets, props.outputs, dep_targets)
        ]


class NinjaCompiler(ModuleCompiler[NinjaProperties]):
    kind = ModuleKind.NINJA
    properties_model = NinjaProperties

    def build_actions(self, module: Module, props: NinjaProperties, dep_targets: list[str]) -> list[BuildAction]:
        return [
            _sub_build(module, NINJA, "ninja", props.ninja_file, props.env, props.targets, props.outputs, dep_targets)
        ]
