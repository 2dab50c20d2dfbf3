"""
Process-wide rule constants.

Every module kind compiles into actions on these rules. They are created once
at import time and never change. Commands reference the Ninja variables
written at the top of every build file (``$Jobs``, ``$cmakeCmd`` ...).
"""

from __future__ import annotations

from ..models.action import PHONY, Rule

# Driver commands, written as top-level Ninja variables.
STATIC_VARIABLES: dict[str, str] = {
    "cmakeCmd": "cmake",
    "gnCmd": "gn",
    "makeCmd": "make",
    "ninjaCmd": "ninja",
    "ToolsDir": "root/tools",
}

CMAKE = Rule(
    name="cmake",
    command="cd $buildDir && $envVars $cmakeCmd -GNinja $cmakeOptions $cmakeDir",
    description="cmake $cmakeDir",
    params=("envVars", "cmakeOptions", "cmakeDir", "buildDir"),
    generator=True,
)

GN = Rule(
    name="gn",
    command=(
        "$envVars $gnCmd gen $buildDir "
        "--root=$gnDir --script-executable=/usr/bin/env --args='$gnArgs'"
    ),
    description="gn $gnDir",
    params=("envVars", "gnDir", "gnArgs", "buildDir"),
    generator=True,
)

MAKE = Rule(
    name="make",
    command="$envVars $makeCmd -j $Jobs -C $makeDir -f $makeFile $targets",
    description="make $makeDir",
    params=("envVars", "targets", "makeFile", "makeDir"),
)

NINJA = Rule(
    name="ninja",
    command="$envVars $ninjaCmd -j $Jobs -C $ninjaDir -f $ninjaFile $targets",
    description="ninja $ninjaDir",
    params=("envVars", "targets", "ninjaFile", "ninjaDir"),
)

SCRIPT = Rule(
    name="script",
    command="cd $workingDir && $envVars $scriptCmd $scriptArgs",
    description="sh $in",
    params=("envVars", "scriptCmd", "scriptArgs", "workingDir"),
)

CP = Rule(name="cp", command="cp -vR $in $out", description="cp $out")

INSTALL = Rule(
    name="install",
    command="install -c $in $destination",
    description="install $out",
    params=("destination",),
)

MKDIR = Rule(name="mkdir", command="mkdir -p $out", description="mkdir $out")

RM = Rule(name="rm", command="rm -rf $files", description="rm $out", params=("files",))

ALL_RULES: tuple[Rule, ...] = (PHONY, CMAKE, GN, MAKE, NINJA, SCRIPT, CP, INSTALL, MKDIR, RM)
