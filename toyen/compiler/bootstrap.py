"""
Bootstrap regenerator.

Adds the single action that keeps the build file up to date: Ninja reruns
toyen on the root declaration file whenever the build file is older than any
file listed in its depfile.
"""

from __future__ import annotations

import os
import shlex
import shutil
import sys
from pathlib import Path

from ..core.config import Config
from ..core.exceptions import ExecutableNotFoundError
from ..core.logging import get_logger
from ..models.action import BuildAction, Rule

logger = get_logger(__name__)


def resolve_executable(argv0: str | None = None) -> str:
    """Find the command that re-runs the current program.

    Args:
        argv0: Program path as invoked; defaults to ``sys.argv[0]``.

    Returns:
        A shell command prefix for the running program.

    Raises:
        ExecutableNotFoundError: If the program cannot be located.
    """
    argv0 = sys.argv[0] if argv0 is None else argv0

    # python -m toyen
    if Path(argv0).name == "__main__.py":
        return f"{shlex.quote(sys.executable)} -m toyen"

    found = shutil.which(argv0) if argv0 else None
    if found is None and argv0 and os.path.isfile(argv0) and os.access(argv0, os.X_OK):
        found = argv0
    if found is None:
        raise ExecutableNotFoundError(
            message="Cannot locate the running executable for the regeneration rule",
            executable=argv0,
        )
    return shlex.quote(os.path.abspath(found))


class Bootstrap:
    """Singleton producing the build file's own regeneration action."""

    def __init__(self, config: Config, root_file: Path, executable: str) -> None:
        """Initialize the regenerator.

        Args:
            config: Shared build configuration.
            root_file: Absolute path of the root declaration file.
            executable: Command prefix from :func:`resolve_executable`.
        """
        self.config = config
        self.root_file = root_file
        self.executable = executable

    def regeneration_args(self) -> list[str]:
        """Flags reproducing the current configuration on rerun."""
        args = [
            "build",
            "--src", str(self.config.src_dir),
            "--out", str(self.config.out_dir),
            "--host", self.config.host_triple,
        ]
        if self.config.target_triple:
            args += ["--target", self.config.target_triple]
        args += ["-j", str(self.config.jobs)]
        return args

    def rule(self) -> Rule:
        flags = " ".join(shlex.quote(arg) for arg in self.regeneration_args())
        return Rule(
            name="builder",
            command=f"{self.executable} {flags} $rootBlueprintFile",
            description="Regenerating Ninja files",
            params=("rootBlueprintFile",),
            generator=True,
            depfile=str(self.config.dep_file),
        )

    def build_actions(self) -> list[BuildAction]:
        action = BuildAction(
            rule=self.rule(),
            outputs=[str(self.config.build_file)],
            args={"rootBlueprintFile": str(self.root_file)},
        )
        logger.debug("Added regeneration action", output=action.outputs[0])
        return [action]
