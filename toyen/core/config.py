"""
Configuration management for toyen.

Provides the process-wide, read-only build configuration shared by every
module compiler: source and output directories, host and target platform
triples and the job count handed to sub-builds. Values come from explicit
overrides (usually command-line flags), then environment variables, then
defaults.
"""

from __future__ import annotations

import os
import platform
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import TripleError

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

_ARCHES = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "i386": "i386",
    "i686": "i386",
    "x86": "i386",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "armv7l": "armv7a",
    "arm": "armv7a",
}


class Triple(BaseModel):
    """A platform triple split into the parts the build cares about."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Triple as given, e.g. x86_64-linux")
    arch: str = Field(default="", description="First component")
    os: str = Field(default="", description="Last component, capitalized")

    @classmethod
    def parse(cls, text: str) -> Triple:
        """Split a triple on '-'.

        An empty triple means "not set" and yields empty parts. Anything else
        must name at least an architecture and an operating system.

        Raises:
            TripleError: If a non-empty triple has fewer than two components
                or an empty architecture or OS component.
        """
        if not text:
            return cls()

        parts = text.split("-")
        if len(parts) < 2 or not parts[0] or not parts[-1]:
            raise TripleError(
                message=f"Malformed platform triple '{text}', expected <arch>-...-<os>",
                triple=text,
            )
        os_name = parts[-1]
        return cls(text=text, arch=parts[0], os=os_name[:1].upper() + os_name[1:])


def default_host_triple() -> str:
    """Describe the machine toyen runs on as an <arch>-<os> triple."""
    arch = _ARCHES.get(platform.machine().lower(), "unknown")
    return f"{arch}-{platform.system().lower() or 'unknown'}"


class Config(BaseModel):
    """Root configuration for a toyen run.

    Constructed once before any module compiles and never mutated afterwards;
    every compiler receives the same instance.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    src_dir: Path = Field(default_factory=lambda: Path(".").resolve(), description="Source directory")
    out_dir: Path = Field(default_factory=lambda: Path(".").resolve(), description="Build output directory")
    host_triple: str = Field(default_factory=default_host_triple, description="Platform build tools run on")
    target_triple: str = Field(default="", description="Platform being built for")
    jobs: int = Field(default_factory=lambda: os.cpu_count() or 1, ge=1, description="Parallel jobs for sub-builds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    @field_validator("host_triple", "target_triple")
    @classmethod
    def _check_triple(cls, value: str) -> str:
        try:
            Triple.parse(value)
        except TripleError as e:
            raise ValueError(str(e)) from e
        return value

    @property
    def host(self) -> Triple:
        return Triple.parse(self.host_triple)

    @property
    def target(self) -> Triple:
        return Triple.parse(self.target_triple)

    @property
    def host_arch(self) -> str:
        return self.host.arch

    @property
    def host_os(self) -> str:
        return self.host.os

    @property
    def target_arch(self) -> str:
        return self.target.arch

    @property
    def target_os(self) -> str:
        return self.target.os

    @property
    def build_file(self) -> Path:
        """The Ninja file toyen writes, and regenerates."""
        return self.out_dir / "build.ninja"

    @property
    def dep_file(self) -> Path:
        return Path(f"{self.build_file}.d")

    def variables(self) -> dict[str, str]:
        """Config values exposed to rule commands as Ninja variables."""
        return {
            "SrcDir": str(self.src_dir),
            "OutDir": str(self.out_dir),
            "HostTriple": self.host_triple,
            "TargetTriple": self.target_triple,
            "HostArch": self.host_arch,
            "HostOS": self.host_os,
            "TargetArch": self.target_arch,
            "TargetOS": self.target_os,
            "Jobs": str(self.jobs),
        }

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Create configuration from environment variables.

        Keyword overrides whose value is not None take precedence over the
        environment, so CLI flags can be passed straight through.

        Raises:
            TripleError: If a host or target triple is malformed.
        """
        values: dict[str, Any] = {}
        if "TOYEN_LOG_LEVEL" in os.environ:
            values["log_level"] = os.environ["TOYEN_LOG_LEVEL"].upper()
        if "TOYEN_JOBS" in os.environ:
            values["jobs"] = int(os.environ["TOYEN_JOBS"])
        if "TOYEN_HOST" in os.environ:
            values["host_triple"] = os.environ["TOYEN_HOST"]
        if "TOYEN_TARGET" in os.environ:
            values["target_triple"] = os.environ["TOYEN_TARGET"]
        values.update({k: v for k, v in overrides.items() if v is not None})

        for key in ("host_triple", "target_triple"):
            if key in values:
                Triple.parse(values[key])
        for key in ("src_dir", "out_dir"):
            if key in values:
                values[key] = Path(values[key]).resolve()

        return cls(**values)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
