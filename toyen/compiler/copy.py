"""Copy modules: copy files, one optional action per file."""

from __future__ import annotations

import posixpath

from ..models.action import PHONY, BuildAction
from ..models.module import CopyProperties, Module, ModuleKind
from .base import ModuleCompiler, mkdir_action, normalize_dir
from .rules import CP


class CopyCompiler(ModuleCompiler[CopyProperties]):
    """Compile ``copy`` modules.

    With several sources the destination is a directory and each file keeps
    its basename. With a single source the destination is the file itself.
    The module name is a phony target over every copied file.
    """

    kind = ModuleKind.COPY
    properties_model = CopyProperties

    def build_actions(self, module: Module, props: CopyProperties, dep_targets: list[str]) -> list[BuildAction]:
        if len(props.sources) > 1:
            destination_dir = normalize_dir(props.destination)
            destination_files = [
                posixpath.join(destination_dir, posixpath.basename(src)) for src in props.sources
            ]
        else:
            destination_dir = posixpath.dirname(props.destination)
            destination_files = [props.destination]

        actions: list[BuildAction] = []
        order_only: list[str] = []
        # A bare file name lands in the build directory itself.
        if destination_dir:
            destination_dir = normalize_dir(destination_dir)
            actions.append(mkdir_action(destination_dir))
            order_only.append(destination_dir)

        for src, dst in zip(props.sources, destination_files):
            actions.append(
                BuildAction(
                    rule=CP,
                    outputs=[dst],
                    inputs=[src],
                    implicits=dep_targets,
                    order_only=order_only,
                    optional=True,
                )
            )

        actions.append(BuildAction(rule=PHONY, outputs=[module.name], inputs=destination_files))
        return actions
