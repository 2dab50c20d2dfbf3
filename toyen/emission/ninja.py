"""
Ninja serialization of a build plan, and depfile rendering.

Output is a pure function of the plan and the variables, so compiling an
unchanged declaration set twice yields byte-identical files.
"""

from __future__ import annotations

from typing import Iterable

from ..compiler.plan import BuildPlan
from ..models.action import BuildAction, Rule

NINJA_REQUIRED_VERSION = "1.7.0"

HEADER = "# This file is generated by toyen. Do not edit.\n"


def escape_path(path: str) -> str:
    """Escape a path for a build line, where '$', ' ' and ':' are special."""
    return path.replace("$", "$$").replace(" ", "$ ").replace(":", "$:")


def escape_value(value: str) -> str:
    """Make a variable value safe to put on one line.

    Values may reference other variables, so '$' is kept as is.
    """
    return value.replace("\n", " ")


def _escape_dep(path: str) -> str:
    return path.replace(" ", "\\ ")


def _paths(paths: Iterable[str]) -> str:
    return " ".join(escape_path(p) for p in paths)


class NinjaWriter:
    """Accumulates Ninja statements as text."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def comment(self, text: str) -> None:
        self._lines.append(f"# {text}")

    def newline(self) -> None:
        self._lines.append("")

    def variable(self, key: str, value: str, indent: int = 0) -> None:
        self._lines.append(f"{'  ' * indent}{key} = {escape_value(value)}".rstrip())

    def rule(self, rule: Rule) -> None:
        self._lines.append(f"rule {rule.name}")
        self.variable("command", rule.command, indent=1)
        if rule.description:
            self.variable("description", rule.description, indent=1)
        if rule.depfile:
            self.variable("depfile", rule.depfile, indent=1)
        if rule.generator:
            self.variable("generator", "1", indent=1)

    def build(self, action: BuildAction) -> None:
        line = f"build {_paths(action.outputs)}: {action.rule.name}"
        if action.inputs:
            line += f" {_paths(action.inputs)}"
        if action.implicits:
            line += f" | {_paths(action.implicits)}"
        if action.order_only:
            line += f" || {_paths(action.order_only)}"
        self._lines.append(line)
        for key in sorted(action.args):
            self.variable(key, action.args[key], indent=1)

    def default(self, targets: list[str]) -> None:
        if targets:
            self._lines.append(f"default {_paths(targets)}")

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"


def render_build_file(plan: BuildPlan, variables: dict[str, str]) -> str:
    """Serialize a plan as a Ninja build file.

    Args:
        plan: Checked build plan.
        variables: Top-level variables rule commands may reference.

    Returns:
        The complete file contents.
    """
    writer = NinjaWriter()
    writer.variable("ninja_required_version", NINJA_REQUIRED_VERSION)
    writer.newline()
    for key in sorted(variables):
        writer.variable(key, variables[key])
    writer.newline()

    for rule in plan.rules():
        writer.rule(rule)
        writer.newline()

    current_owner = None
    for planned in plan.actions:
        if planned.owner != current_owner:
            writer.comment(f"Module: {planned.owner}")
            current_owner = planned.owner
        writer.build(planned.action)
        writer.newline()

    writer.default(plan.defaults())
    return HEADER + "\n" + writer.getvalue()


def render_depfile(target: str, deps: list[str]) -> str:
    """Render a Makefile-style depfile: ``target: dep1 dep2 ...``.

    Each dependency goes on its own continuation line; spaces in paths are
    backslash-escaped.
    """
    escaped = [_escape_dep(dep) for dep in deps]
    lines = [f"{_escape_dep(target)}: \\"]
    lines += [f" {dep} \\" for dep in escaped[:-1]]
    if escaped:
        lines.append(f" {escaped[-1]}")
    else:
        lines[0] = lines[0][:-2]
    return "\n".join(lines) + "\n"
