"""Install modules: install files into a directory with one command."""

from __future__ import annotations

import posixpath

from ..models.action import BuildAction
from ..models.module import InstallProperties, Module, ModuleKind
from .base import ModuleCompiler, mkdir_action, normalize_dir
from .rules import INSTALL


class InstallCompiler(ModuleCompiler[InstallProperties]):
    """Compile ``install`` modules.

    All sources go through a single batched action, unlike ``copy``.
    """

    kind = ModuleKind.INSTALL
    properties_model = InstallProperties

    def build_actions(self, module: Module, props: InstallProperties, dep_targets: list[str]) -> list[BuildAction]:
        destination = normalize_dir(props.destination)
        destination_files = [posixpath.join(destination, posixpath.basename(src)) for src in props.sources]

        return [
            mkdir_action(destination),
            BuildAction(
                rule=INSTALL,
                outputs=destination_files,
                inputs=list(props.sources),
                implicits=dep_targets,
                order_only=[destination],
                args={"destination": destination},
            ),
        ]
