"""CMake modules: configure a CMake project into a Ninja build directory."""

from __future__ import annotations

import posixpath

from ..models.action import BuildAction
from ..models.module import CMakeProperties, Module, ModuleKind
from .base import ModuleCompiler, join_words, mkdir_action, normalize_dir
from .rules import CMAKE


class CMakeCompiler(ModuleCompiler[CMakeProperties]):
    """Compile ``cmake`` modules.

    The configure step is a generator action: Ninja reruns it only when its
    own inputs change, not because the generated build.ninja looks stale.
    """

    kind = ModuleKind.CMAKE
    properties_model = CMakeProperties

    def build_actions(self, module: Module, props: CMakeProperties, dep_targets: list[str]) -> list[BuildAction]:
        build_dir = normalize_dir(props.build_dir)
        options = [f"-D{opt}" for opt in props.options]

        return [
            mkdir_action(build_dir),
            BuildAction(
                rule=CMAKE,
                outputs=[posixpath.join(build_dir, "build.ninja")],
                implicits=dep_targets,
                order_only=[build_dir],
                args={
                    "cmakeOptions": join_words(options),
                    "cmakeDir": props.src,
                    "envVars": join_words(props.env),
                    "buildDir": build_dir,
                },
            ),
        ]
