"""GN modules: generate a Ninja build directory with GN."""

from __future__ import annotations

import posixpath

from ..models.action import BuildAction
from ..models.module import GnProperties, Module, ModuleKind
from .base import ModuleCompiler, join_words, normalize_dir
from .rules import GN


class GnCompiler(ModuleCompiler[GnProperties]):
    """Compile ``gn`` modules.

    GN creates its build directory itself, so unlike cmake there is no
    directory-creation step.
    """

    kind = ModuleKind.GN
    properties_model = GnProperties

    def build_actions(self, module: Module, props: GnProperties, dep_targets: list[str]) -> list[BuildAction]:
        build_dir = normalize_dir(props.build_dir)
        return [
            BuildAction(
                rule=GN,
                outputs=[posixpath.join(build_dir, "build.ninja")],
                implicits=dep_targets,
                args={
                    "envVars": join_words(props.env),
                    "gnDir": props.src_dir,
                    "gnArgs": join_words(props.args),
                    "buildDir": build_dir,
                },
            )
        ]
