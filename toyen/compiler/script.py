"""Script modules: run a script, optionally producing declared files."""

from __future__ import annotations

from ..models.action import PHONY, BuildAction
from ..models.module import Module, ModuleKind, ScriptProperties
from .base import ModuleCompiler, join_words, mkdir_action, normalize_dir
from .rules import SCRIPT


class ScriptCompiler(ModuleCompiler[ScriptProperties]):
    """Compile ``script`` modules.

    A script with declared outputs gets two tiers: the script action
    producing the files, and a phony action named after the module over
    them. Dependents may use either the module name or a single file. A
    script without outputs is a single action whose output is the module
    name, so it runs on every build.
    """

    kind = ModuleKind.SCRIPT
    properties_model = ScriptProperties

    def build_actions(self, module: Module, props: ScriptProperties, dep_targets: list[str]) -> list[BuildAction]:
        working_dir = normalize_dir(props.working_dir)
        args = {
            "envVars": join_words(props.env),
            "scriptCmd": props.script,
            "scriptArgs": join_words(props.args),
            "workingDir": working_dir,
        }
        implicits = [*props.inputs, *dep_targets, props.script]
        outputs = [*props.outputs, *props.gen_files]

        actions = [mkdir_action(working_dir)]
        if outputs:
            actions.append(
                BuildAction(
                    rule=SCRIPT,
                    outputs=outputs,
                    inputs=[props.script],
                    implicits=implicits,
                    order_only=[working_dir],
                    args=args,
                    optional=True,
                )
            )
            actions.append(BuildAction(rule=PHONY, outputs=[module.name], inputs=outputs))
        else:
            actions.append(
                BuildAction(
                    rule=SCRIPT,
                    outputs=[module.name],
                    inputs=[props.script],
                    implicits=implicits,
                    order_only=[working_dir],
                    args=args,
                )
            )
        return actions
